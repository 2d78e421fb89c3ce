# spellborn-launcher

A small command-line tool that installs, updates and starts the Spellborn game
client.

## Installation

```
pip install .
```

## Usage

Run the launcher from the directory where the game should live:

```
spellborn-launcher
```

Options:

- `--game-info PATH`: the game info file to read and write (default: `game.json`).
- `--file-server URL`: base URL of the file server. File names are appended to
  it directly, so it should end with `/`. The default is the game's own file
  server.

On each run the launcher does the following:

1. Reads the game info file to find out whether the game is installed and which
   version it is. The game counts as installed when the file can be read and has
   a non-empty `version`.
2. If the game is not installed, it fetches `latest.json` from the file server
   and downloads the archive it names into the current directory. It checks the
   archive's MD5 checksum, unpacks the archive into the current directory and
   writes a new game info file with the release's version. If the checksum does
   not match, the archive is left in place and nothing is unpacked; delete it
   to download it again.
3. It fetches `updates.json` and applies every update whose `applies_to` matches
   the installed version, one after another, recording each new version in the
   game info file, until no update applies.
4. It starts `bin/client/Sb_client.exe` from the current directory, with that
   file's directory as the working directory, and does not wait for it. On
   Windows it asks for elevation.

Downloads resume: if a partly downloaded archive is present, only the rest is
requested. If the server answers with the whole file instead, the download
starts over. Fetching `latest.json` and `updates.json` times out after five
seconds.

Archives are unpacked member by member; a member whose path would land outside
the target directory stops the extraction.

## Configuration

The game info file holds the local settings next to the installed version:

```json
{
  "path": "",
  "version": "1.0.0",
  "keep_downloads": false,
  "no_launch": false
}
```

- `keep_downloads`: keep the downloaded archives after they are unpacked.
- `no_launch`: install and update, but do not start the client.

## Library use

The same steps are available from Python:

```python
from spellborn_launcher.game import Launcher
from spellborn_launcher.cli import run

launcher = Launcher("game.json", "https://files.example.com/")
if launcher.is_installed():
    print(launcher.get_game_info().version)

started = run(launcher)
```

`Launcher` has `is_installed`, `get_game_info`, `fetch_latest_version`,
`fetch_updates`, `update_version`, `download_latest`, `update_loop` and
`launch_game`. `run` returns `True` when the client was started.

`spellborn_launcher.transfer` provides `download_file`, `verify_checksum`,
`extract_zip` and `remove_file`, and the `DownloadError` and
`UnsafeArchiveError` exceptions. `spellborn_launcher.models` provides the
`Latest`, `Update` and `Game` records, `parse_updates` and `ModelError`.

## Limitations

- Updates are not checked against their checksum, and their `enabled` flag is
  not consulted: every update that applies to the installed version is
  installed.
- The `server` fields of `latest.json` and `updates.json` are read but not
  used; everything is downloaded from the one file server.

## Running the tests

```
pip install ".[test]"
pytest
```