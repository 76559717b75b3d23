# Errors raised by the build stages. Each one carries the exit status the
# wrapper terminates with once it has been reported.

class BundlerError(Exception):
    exit_code = 1

    def __init__(self, message, hints=None, output_tail=None):
        super().__init__(message)
        self.hints = list(hints or [])
        self.output_tail = list(output_tail or [])

class UsageError(BundlerError):
    exit_code = 1

class PrerequisiteError(BundlerError):
    exit_code = 1

class BuildError(BundlerError):
    exit_code = 2

    def __init__(self, message, child_exit_code, hints=None, output_tail=None):
        super().__init__(message, hints, output_tail)
        self.child_exit_code = child_exit_code

class OutputError(BundlerError):
    exit_code = 2

class ManifestError(ValueError):
    """Raised when the framework's Info.plist can't be read. Never fatal."""
