import platform
import shutil
from subprocess import DEVNULL, PIPE, run

from .errors import PrerequisiteError
from . import utils

class EnvironmentChecker():
    """Verifies the host can build the xcframework.

    Checks run in a fixed order and the first missing prerequisite raises
    PrerequisiteError. The runner, which and system callables default to
    subprocess.run, shutil.which and platform.system.
    """

    def __init__(self, runner=None, which=None, system=None):
        self.runner = runner or run
        self.which = which or shutil.which
        self.system = system or platform.system

    def command_output(self, cmd):
        """Returns the stripped stdout of cmd, or None if it couldn't be
        run or exited non-zero."""
        try:
            proc = self.runner(cmd, stdout=PIPE, stderr=DEVNULL, text=True,
                               check=False)
        except OSError:
            return None
        if proc.returncode != 0:
            return None
        return (proc.stdout or "").strip()

    def check_platform(self):
        if self.system() != "Darwin":
            raise PrerequisiteError("This script requires macOS (Darwin)")
        utils.success("macOS detected")

    def check_xcode(self):
        path = self.command_output(["xcode-select", "-p"])
        if path is None:
            raise PrerequisiteError("Xcode command line tools not found",
                                    hints=["Please install with: xcode-select --install"])
        utils.success(f'Xcode found: {path}')
        return path

    def check_zig(self):
        if not self.which("zig"):
            raise PrerequisiteError("Zig not found in PATH",
                                    hints=["Please install Zig from https://ziglang.org/download/",
                                           "Or use: brew install zig"])
        version = self.command_output(["zig", "version"]) or "unknown version"
        utils.success(f'Zig found: {version}')
        return version

    def check_ios_sdk(self):
        sdks = self.command_output(["xcodebuild", "-showsdks"])
        if not sdks or "iphoneos" not in sdks:
            raise PrerequisiteError("iOS SDK not found",
                                    hints=["Please install Xcode with iOS SDK support"])
        utils.success("iOS SDK available")

    def probe_nix(self):
        # Only informational, Nix gives builds matching CI.
        if self.which("nix"):
            utils.info("Nix detected (available for reproducible builds)")
            return True
        return False

    def run_all(self):
        self.check_platform()
        self.check_xcode()
        self.check_zig()
        self.check_ios_sdk()
        return self.probe_nix()
