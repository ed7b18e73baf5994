# libbuildpack

Building blocks for writing buildpacks in Python. The package reads the
information a buildpack is given (command line arguments, environment, platform
directory, `buildpack.toml`, the buildpack plan) and writes the files a buildpack
hands back (build plan, layer environment files, profile scripts, layer metadata,
`launch.toml`, `store.toml`). It uses only the standard library.

## Modules

- `libbuildpack.logger`: `Logger(debug_stream, info_stream)` writes %-formatted lines with
  `debug()` and `info()`; a level whose stream is `None` is disabled
  (`is_debug_enabled()`, `is_info_enabled()`). `default_logger(platform)` always writes
  info to stdout, and debug to stderr only when `BP_DEBUG` is in the environment or a
  `<platform>/env/BP_DEBUG` file exists.
- `libbuildpack.application`: `default_application(logger)` returns an `Application`
  whose `root` is the current working directory.
- `libbuildpack.buildpack`: `Buildpack`, `Info` and `Stack`, read from `buildpack.toml`.
  `new_buildpack(root, logger)` reads it from a given directory and raises
  `FileNotFoundError` if it cannot be read; `default_buildpack(logger)` searches upwards
  from the directory of `sys.argv[0]`. `Buildpack.from_dict(data, root)` builds one from an
  already parsed document.
- `libbuildpack.buildplan`: `Provided`, `Required`, `Plan` and `Plans` (a primary `plan`
  and a list of `alternatives`, written under `or`), each with `to_dict()`.
  `default_writer(index)` returns a function that writes `Plans` as TOML to the file
  named by `sys.argv[index]`.
- `libbuildpack.buildpackplan`: `Plan` and `Plans` (its `entries`). `default_plans(path,
  logger)` reads them from a TOML file; `default_writer(index)` writes them to the file
  named by `sys.argv[index]`.
- `libbuildpack.layers`: `Layers(root)` and its `layer(name)`, a `Layer` whose directory is
  `<root>/<name>` and whose metadata file is `<root>/<name>.toml`.
  - Environment files: `append_*_env`, `prepend_*_env`, `default_*_env`,
    `override_*_env`, `delimiter_*_env` and `prepend_path_*_env`, where `*` is `build`
    (`env.build/`), `launch` (`env.launch/`) or `shared` (`env/`). The suffixes written
    are `.append`, `.prepend`, `.default`, `.override`, `.delim`, or none for path
    prepending. The `append_path_*_env` methods are deprecated aliases of
    `prepend_path_*_env` and emit a `DeprecationWarning`.
  - `write_profile(file, format, *args)` writes `profile.d/<file>`.
  - `write_metadata(metadata, *flags)` writes `build`, `cache` and `launch` flags (from
    `Flag.BUILD`, `Flag.CACHE`, `Flag.LAUNCH`) and a `[metadata]` table;
    `read_metadata()` returns that table as a dict (empty if the file does not exist);
    `remove_metadata()` deletes the file if present. Metadata may be a mapping, a
    dataclass, or an object with `to_dict()`.
  - `Layers.write_application_metadata(LaunchMetadata(...))` writes `launch.toml` from
    `Process` and `Slice` entries; `Layers.write_persistent_metadata(metadata)` writes
    `store.toml`.
- `libbuildpack.platform`: `default_platform(root, logger)` returns a `Platform` whose
  `environment_variables` (an `EnvironmentVariables` dict) are read from the files in
  `<root>/env`; `set_all()` exports them into `os.environ`.
- `libbuildpack.services`: `default_services(platform, logger)` parses the JSON in
  `CNB_SERVICES`, taken from the process environment or, failing that, from the platform,
  into a list of `Service` entries. Malformed content raises `ValueError`.
- `libbuildpack.stack`: `default_stack(logger)` returns `CNB_STACK_ID` and raises
  `LookupError("CNB_STACK_ID not set")` when it is missing.
- `libbuildpack.detect`: `Detect` gathers all of the above for a detect program.
  `default_detect()` takes the platform directory from `sys.argv[1]` and writes the build
  plan to `sys.argv[2]`. `FAIL_STATUS_CODE` is 100, `PASS_STATUS_CODE` is 0.
- `libbuildpack.fsutil`: `argument(index)`, `directory_contents(root)`,
  `file_exists(path)`, `write_file(filename, content, perm)` and
  `write_toml_file(filename, value, perm)`, the file helpers the other modules use.
- `libbuildpack.tomlwriter`: `dumps(mapping)` renders plain data as a TOML document, plain
  values first, then tables and arrays of tables, nested levels indented by two spaces,
  `None` values left out.

## A detect program

```python
import sys

from libbuildpack import buildplan
from libbuildpack.detect import default_detect


def main():
    detect = default_detect()

    plan = buildplan.Plan(
        provides=[buildplan.Provided(name="example-runtime")],
        requires=[buildplan.Required(name="example-runtime", version="1.0")],
    )
    return detect.pass_(plan)


if __name__ == "__main__":
    sys.exit(main())
```

`Detect.pass_` writes the first plan as the primary plan and any further plans as
alternatives under `or`, and returns `0`. `Detect.fail()` returns `100`, and
`Detect.error(code)` returns the code it was given, so each can serve directly as the
program's exit status.

## What it does not do

- It installs no command; a buildpack supplies its own `detect` and `build` programs
  and calls the package from them.
- There is no counterpart of `Detect` for the build step. A build program puts
  `default_logger`, `default_buildpack`, `default_plans`, `Layers` and the others together
  itself.
- `tomlwriter` writes tables and arrays of tables but not inline tables, and reading TOML
  is left to the standard library's `tomllib`.