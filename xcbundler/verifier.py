import os
from collections import namedtuple

from .errors import ManifestError, OutputError
from .options import UNIVERSAL
from . import utils

BUNDLE_PATH = os.path.join("macos", "GhosttyKit.xcframework")
MANIFEST_NAME = "Info.plist"

EXPECTED_UNIVERSAL_DIRS = (
    "ios-arm64",
    "ios-arm64-simulator",
    "macos-arm64_x86_64",
)

PlatformEntry = namedtuple("PlatformEntry",
                           ["identifier", "architectures", "directory_present"])

class VerificationReport():
    def __init__(self, bundle_path):
        self.bundle_path = bundle_path
        self.platforms = []
        # Expected universal directory name -> present.
        self.expected = {}
        self.warnings = []
        self.manifest_parsed = False

    def warn(self, message):
        self.warnings.append(message)
        utils.warn(message)

    def missing_platforms(self):
        return [p.identifier for p in self.platforms if not p.directory_present]

    def missing_expected(self):
        return [name for name, present in self.expected.items() if not present]

def format_architectures(architectures):
    if not architectures:
        return "unknown"
    return ", ".join(architectures)

def verify_output(project_root, config, reader):
    """Checks the built xcframework below project_root.

    A missing bundle or manifest raises OutputError. Everything else
    (unreadable manifest, missing platform directories) only adds warnings
    to the returned VerificationReport.
    """
    bundle_path = os.path.join(project_root, BUNDLE_PATH)
    if not os.path.isdir(bundle_path):
        raise OutputError(f'XCFramework not found at: {bundle_path}')
    utils.success("XCFramework exists")

    manifest_path = os.path.join(bundle_path, MANIFEST_NAME)
    if not os.path.isfile(manifest_path):
        raise OutputError(f'{MANIFEST_NAME} not found at: {manifest_path}')
    utils.success(f'{MANIFEST_NAME} exists')

    report = VerificationReport(bundle_path)

    utils.info("Analyzing framework contents...")
    try:
        libraries = reader.parse(manifest_path)
    except ManifestError:
        libraries = []

    if libraries:
        report.manifest_parsed = True
        print()
        utils.info("Included platforms:")
        for library in libraries:
            print(f'  • {library.identifier} [{format_architectures(library.architectures)}]')
            present = os.path.isdir(os.path.join(bundle_path, library.identifier))
            report.platforms.append(PlatformEntry(library.identifier,
                                                  set(library.architectures),
                                                  present))
            if not present:
                report.warn(f'  Platform directory not found: {library.identifier}')
    else:
        report.warn(f'Could not parse platform information from {MANIFEST_NAME}')

    if config.target == UNIVERSAL:
        for name in EXPECTED_UNIVERSAL_DIRS:
            present = os.path.isdir(os.path.join(bundle_path, name))
            report.expected[name] = present
            if present:
                utils.success(f'Found: {name}')
            else:
                report.warn(f'Missing expected directory: {name}')

    return report
