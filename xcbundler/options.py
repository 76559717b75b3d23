from collections import namedtuple

from .errors import UsageError

DEBUG = "Debug"
RELEASE = "Release"

UNIVERSAL = "universal"
NATIVE = "native"
TARGETS = (UNIVERSAL, NATIVE)

BUNDLE_DISPLAY_PATH = "macos/GhosttyKit.xcframework"

class BuildConfig(namedtuple("BuildConfig", ["optimize", "target", "clean", "verbose"])):
    __slots__ = ()

    @property
    def release(self):
        return self.optimize == RELEASE

DEFAULT_CONFIG = BuildConfig(DEBUG, UNIVERSAL, False, False)

class HelpRequested(Exception):
    pass

def parse_args(argv):
    """Turns the argument list (without the program name) into a
    BuildConfig.

    Raises HelpRequested when --help or -h is present anywhere, and
    UsageError for an unknown option or a bad --target value.
    """
    if "--help" in argv or "-h" in argv:
        raise HelpRequested()

    optimize, target, clean, verbose = DEFAULT_CONFIG
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--release":
            optimize = RELEASE
        elif arg == "--debug":
            optimize = DEBUG
        elif arg == "--target":
            if i + 1 >= len(argv):
                raise UsageError("--target requires an argument (universal or native)")
            target = argv[i + 1]
            if target not in TARGETS:
                raise UsageError(f"Invalid target: {target} (must be 'universal' or 'native')")
            i += 1
        elif arg == "--clean":
            clean = True
        elif arg == "--verbose":
            verbose = True
        else:
            raise UsageError(f'Unknown option: {arg}')
        i += 1

    return BuildConfig(optimize, target, clean, verbose)

def usage(prog):
    return f'''Usage: {prog} [OPTIONS]

Description:
  Build GhosttyKit.xcframework for iOS and macOS platforms.
  This wraps the existing Zig build system to make it easy to build
  the xcframework without remembering complex build flags.

Options:
  --release           Build in release mode (default: debug)
  --debug             Build in debug mode
  --target <TYPE>     Target type: universal or native (default: universal)
                      - universal: macOS (arm64+x86_64), iOS device (arm64), iOS simulator (arm64)
                      - native: macOS native architecture only (faster for development)
  --clean             Clean zig-cache and zig-out before building
  --verbose           Show full Zig build output
  --help, -h          Show this help message

Examples:
  # Basic debug build (universal)
  {prog}

  # Release build for distribution
  {prog} --release

  # Quick native build for development
  {prog} --target native

  # Clean release build
  {prog} --clean --release

Output:
  {BUNDLE_DISPLAY_PATH}/

Requirements:
  - macOS operating system
  - Xcode and iOS SDK
  - Zig build system
'''
