# rustlings

A command-line runner for small Rust exercises. Each exercise is a `.rs` file
that fails to compile, fails its tests, or trips a Clippy lint; you fix it,
and the runner tells you when you can move on.

## Requirements

- Python 3.11 or newer
- A Rust toolchain on your `PATH`: `rustc` for every command, and `cargo`
  for Clippy and build-script exercises
- `git` for `rustlings reset`

## Installing

```
pip install .
```

This installs the `rustlings` command.

## Exercises directory

Every command except `--version` must be run from a directory that holds an
`info.toml` file listing the exercises in order:

```toml
[[exercises]]
name = "intro1"
path = "exercises/intro/intro1.rs"
mode = "compile"
hint = "No hints this time ;)"
```

`mode` is one of:

- `compile` – the file is compiled with `rustc` and the binary is run
- `test` – the file is compiled with `rustc --test` and its tests are run
- `clippy` – the file is checked with `cargo clippy -- -D warnings -D clippy::float_cmp`;
  a `Cargo.toml` is written to `./exercises/clippy/Cargo.toml` first
- `buildscript` – `cargo test` is run on a `Cargo.toml` written to
  `./exercises/tests/Cargo.toml`

An exercise counts as pending while its file still contains a line like
`// I AM NOT DONE`. When a pending exercise passes, the runner shows the lines
around that marker; remove the line once you are happy with your solution.

The command exits with status 1 if `info.toml` is missing or `rustc --version`
cannot be run.

## Commands

```
rustlings                    # welcome text and a short introduction
rustlings watch              # re-verify exercises whenever a file changes
rustlings watch --success-hints
rustlings verify             # verify every exercise in order, stop at the first failure
rustlings run intro1         # compile and run (or test) one exercise
rustlings run next           # run the first exercise that is not done yet
rustlings hint intro1        # print the hint for an exercise
rustlings reset intro1       # start `git stash -- <path>` for the exercise's file
rustlings list               # show every exercise with its status and overall progress
rustlings list --solved      # only finished exercises (-s)
rustlings list --unsolved    # only pending exercises (-u)
rustlings list --paths       # only paths (-p); --names (-n) for names only
rustlings list --filter if,var   # comma separated name or path patterns (-f)
rustlings lsp                # write rust-project.json for rust-analyzer
rustlings cicvverify         # grade all exercises, write .github/result/check_result.json
rustlings --version          # or -v
```

`--nocapture` shows the output of test exercises, e.g.
`rustlings --nocapture run testSuccess`.

`run`, `verify` and `reset` exit with status 1 on failure; `run`, `reset` and
`hint` also exit with 1 when the exercise name is missing or unknown.

`lsp` adds one crate per `.rs` file found below `./exercises`. It takes the
standard library sources from `RUST_SRC_PATH` if set, otherwise from
`rustc --print sysroot`.

### Watch mode

`rustlings watch` verifies the exercises in order and stops at the first one
that fails or is still pending. It then watches `./exercises` and verifies
again whenever a `.rs` file is created or changed, starting with the changed
exercise. While watching, type one of these commands and press Enter:

- `hint` – print the hint of the exercise you are working on
- `clear` – clear the screen
- `quit` – leave watch mode
- `!<cmd>` – run a command, e.g. `!rustc --explain E0381`
- `help` – list these commands

### Grading

`rustlings cicvverify` runs every exercise concurrently, prints a line per
exercise as it finishes, and writes `.github/result/check_result.json` with
one `{"name": ..., "result": true|false}` entry per exercise, a `user_name`
field (always `null`), and `statistics` holding `total_exercations`,
`total_succeeds`, `total_failures` and `total_time` in seconds.

## Environment

- `NO_EMOJI` – plain-text markers instead of emoji
- `CLICOLOR_FORCE` (not `0`) forces colours; `CLICOLOR=0` turns them off.
  Otherwise colours are used only on a terminal whose `TERM` is not `dumb`.

## What it does not include

The package is only the runner: it ships no exercises and no `info.toml`.
You need an exercises directory of your own, laid out as described above.

## Running the tests

```
pip install .[test]
pytest
```