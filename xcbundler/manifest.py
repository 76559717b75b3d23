import plistlib
from collections import namedtuple

from .errors import ManifestError

# One entry of the AvailableLibraries array, e.g. ios-arm64 / [arm64].
Library = namedtuple("Library", ["identifier", "architectures"])

class ManifestReader():
    def parse(self, path):
        """Returns the list of Library entries described by path, or
        raises ManifestError."""
        raise NotImplementedError

class PlistManifestReader(ManifestReader):
    """Reads an xcframework Info.plist, XML or binary."""

    def parse(self, path):
        try:
            with open(path, "rb") as f:
                plist = plistlib.load(f)
        except Exception as e:
            # plistlib lets AttributeError, TypeError and friends escape on
            # malformed values such as a bad <date>.
            raise ManifestError(f'Could not read {path}: {e}') from e

        if not isinstance(plist, dict):
            raise ManifestError(f'{path} is not a dictionary')
        libraries = plist.get("AvailableLibraries")
        if not isinstance(libraries, list):
            raise ManifestError(f'{path} has no AvailableLibraries array')

        entries = []
        for index, library in enumerate(libraries):
            if not isinstance(library, dict):
                raise ManifestError(f'AvailableLibraries.{index} is not a dictionary')
            identifier = library.get("LibraryIdentifier")
            if not isinstance(identifier, str) or not identifier:
                identifier = "unknown"
            architectures = library.get("SupportedArchitectures")
            if not isinstance(architectures, list):
                architectures = []
            architectures = [arch for arch in architectures
                             if isinstance(arch, str) and arch]
            entries.append(Library(identifier, architectures))
        return entries
