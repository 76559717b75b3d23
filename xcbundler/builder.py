import os
import time
from collections import namedtuple
from subprocess import PIPE, STDOUT, Popen

from .errors import BuildError, PrerequisiteError
from . import utils

CACHE_DIRS = ("zig-cache", "zig-out")
OUTPUT_TAIL_LINES = 30

BuildResult = namedtuple("BuildResult", ["exit_code", "output", "duration"])

def build_command(config, executable="zig"):
    cmd = [executable, "build",
           "-Demit-xcframework=true",
           "-Demit-macos-app=false",
           f'-Dxcframework-target={config.target}']
    if config.release:
        cmd.append("-Doptimize=ReleaseFast")
    return cmd

def clean_build_state(project_root):
    """Removes the zig cache and output directories if they exist."""
    for name in CACHE_DIRS:
        path = os.path.join(project_root, name)
        if os.path.isdir(path):
            utils.info(f'Removing {name}/')
            try:
                utils.recursive_rm(path)
            except OSError as e:
                raise PrerequisiteError(f'Could not remove {path}: {e.strerror or e}',
                                        hints=["Check the permissions of the build directories"]) from e
    # The xcframework itself is cleaned by the zig build.

class Builder():
    def invoke(self, config):
        """Runs the build for config and returns a BuildResult."""
        raise NotImplementedError

class ZigBuilder(Builder):
    def __init__(self, project_root, executable="zig"):
        self.project_root = project_root
        self.executable = executable

    def invoke(self, config):
        cmd = build_command(config, self.executable)
        start = time.monotonic()
        try:
            if config.verbose:
                # Inherit our stdout and stderr so output streams live.
                with Popen(cmd, cwd=self.project_root) as proc:
                    proc.wait()
                output = ""
            else:
                with Popen(cmd, cwd=self.project_root, stdout=PIPE,
                           stderr=STDOUT) as proc:
                    output = proc.communicate()[0].decode("utf-8", errors="replace")
        except OSError as e:
            raise BuildError(f'Could not run {cmd[0]}: {e}', child_exit_code=None)

        return BuildResult(proc.returncode, output, time.monotonic() - start)

def run_build(builder, config):
    """Invokes builder and raises BuildError if the build failed."""
    utils.info(f'Command: {" ".join(build_command(config))}')
    result = builder.invoke(config)
    if result.exit_code != 0:
        if config.verbose:
            raise BuildError(f'zig build exited with status {result.exit_code}',
                             child_exit_code=result.exit_code)
        raise BuildError(f'Build failed. Last {OUTPUT_TAIL_LINES} lines of output:',
                         child_exit_code=result.exit_code,
                         output_tail=utils.tail(result.output, OUTPUT_TAIL_LINES))
    return result
