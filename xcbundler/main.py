import os
import sys

from .builder import ZigBuilder, clean_build_state, run_build
from .environment import EnvironmentChecker
from .errors import BundlerError, UsageError
from .manifest import PlistManifestReader
from .options import BUNDLE_DISPLAY_PATH, HelpRequested, parse_args, usage
from .verifier import verify_output
from . import utils

EXIT_INTERRUPTED = 130

def prog_name():
    name = os.path.basename(sys.argv[0])
    if not name or name == "__main__.py":
        return "xcbundler"
    return name

def print_summary(config, result):
    utils.header("Build Successful!")
    print()
    utils.success(f'XCFramework ready at: {utils.paint(utils.BOLD, BUNDLE_DISPLAY_PATH)}')
    utils.info(f'Build time: {result.duration:.1f}s')
    utils.info(f'Build mode: {config.optimize}')
    utils.info(f'Target: {config.target}')
    print()
    utils.info("Next steps:")
    print("  1. Open macos/Ghostty.xcodeproj in Xcode")
    print("  2. The framework is ready to use in both macOS and iOS targets")
    print("  3. Build your app to verify integration")
    print()

def build(config, project_root, checker, builder, reader):
    utils.info(f'Project root: {project_root}')

    utils.header("Checking Prerequisites")
    checker.run_all()

    if config.clean:
        utils.header("Cleaning Build Artifacts")
        clean_build_state(project_root)
        utils.success("Clean completed")

    utils.header("Build Configuration")
    utils.info(f'Mode: {config.optimize}')
    utils.info(f'Target: {config.target}')
    utils.info(f'Output: {BUNDLE_DISPLAY_PATH}')

    utils.header("Building XCFramework")
    result = run_build(builder or ZigBuilder(project_root), config)
    utils.success(f'Build completed in {result.duration:.1f}s')

    utils.header("Verifying Output")
    report = verify_output(project_root, config, reader)

    print_summary(config, result)
    return result, report

def main(argv, cwd=None, checker=None, builder=None, reader=None):
    """Runs the wrapper for argv (without the program name) and returns
    the exit status."""
    try:
        config = parse_args(argv)
    except HelpRequested:
        print(usage(prog_name()))
        return 0
    except UsageError as err:
        utils.error(str(err))
        print("Use --help for usage information", file=sys.stderr)
        return err.exit_code

    try:
        with utils.failure_report(config.verbose):
            project_root = utils.find_project_root(cwd)
            build(config, project_root,
                  checker or EnvironmentChecker(),
                  builder,
                  reader or PlistManifestReader())
    except BundlerError as err:
        return err.exit_code
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED
    return 0

def run():
    sys.exit(main(sys.argv[1:]))
