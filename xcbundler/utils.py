import os
import shutil
import sys
from contextlib import contextmanager

from .errors import BundlerError, PrerequisiteError

PROJECT_MARKER = "build.zig"
PROJECT_ROOT_ENV = "XCBUNDLER_PROJECT_ROOT"

RED = '\033[0;31m'
GREEN = '\033[0;32m'
YELLOW = '\033[1;33m'
BLUE = '\033[0;34m'
BOLD = '\033[1m'
NC = '\033[0m'

# None until first use, then whether stdout was a terminal.
COLOR = None

def set_color(enabled):
    global COLOR
    COLOR = enabled

def use_color():
    global COLOR
    if COLOR is None:
        try:
            COLOR = sys.stdout.isatty()
        except (AttributeError, ValueError):
            COLOR = False
    return COLOR

def paint(code, text):
    if not use_color():
        return text
    return f'{code}{text}{NC}'

def error(message):
    print(f'{paint(RED, "ERROR:")} {message}', file=sys.stderr)

def success(message):
    print(f'{paint(GREEN, "✓")} {message}')

def info(message):
    print(f'{paint(BLUE, "→")} {message}')

def warn(message):
    print(f'{paint(YELLOW, "⚠")} {message}')

def header(message):
    print()
    print(paint(BOLD, message))

def tail(text, count):
    """Returns the last count lines of text, like tail -n."""
    if count <= 0 or not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines[-count:]

def recursive_rm(dirname):
    """Removes dirname and everything below it. A missing directory is
    not an error."""
    dirname = os.path.abspath(dirname)
    home = os.path.expanduser("~")
    # Extra safety ;)
    if dirname in [os.path.abspath(os.sep), home, os.path.join(home, "Desktop")]:
        raise ValueError(f'Refusing to remove {dirname}')

    if os.path.islink(dirname):
        os.unlink(dirname)
    elif os.path.isdir(dirname):
        shutil.rmtree(dirname)

def script_dir():
    return os.path.dirname(os.path.abspath(sys.argv[0]))

def find_project_root(cwd=None, fallback=None):
    """Locates the directory holding build.zig.

    The current directory wins; otherwise $XCBUNDLER_PROJECT_ROOT and then
    the directory the tool was launched from are tried.
    """
    candidates = [cwd or os.getcwd()]
    env_root = os.getenv(PROJECT_ROOT_ENV)
    if env_root:
        candidates.append(env_root)
    candidates.append(fallback or script_dir())

    for candidate in candidates:
        if os.path.isfile(os.path.join(candidate, PROJECT_MARKER)):
            return os.path.abspath(candidate)

    raise PrerequisiteError(
        f'Could not find {PROJECT_MARKER} in current directory or script directory',
        hints=["Please run this script from the Ghostty project root"])

def report(err):
    error(str(err))
    for hint in err.hints:
        error(hint)
    for line in err.output_tail:
        print(line)

@contextmanager
def failure_report(verbose):
    """Reports any BundlerError or interruption escaping the block, then
    re-raises it so the caller can pick the exit status."""
    try:
        yield
    except BundlerError as err:
        report(err)
        error(f'Build failed with exit code {err.exit_code}')
        if not verbose:
            warn("Run with --verbose to see full build output")
        raise
    except KeyboardInterrupt:
        print()
        error("Build interrupted")
        raise
