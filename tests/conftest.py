"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from ci_baseline.models import CiBaselineLine, CiBaselineState, Triplet

EXAMPLE_INPUT = """###########################################################################
## This file defines the current expected build state of ports in CI.
##
## States
##   pass - (default) the port builds in the CI system.  If a port is
##          missing from this file then it is assumed to build.
##   fail - the port does not build in the CI system.
##          This is not necessarily the same as if a port is expected to build
##          on a developers machine because it may fail due to the machine
##          configuration.  When set to fail the CI system will still attempt
##          to build the port and will report a CI failure until this file is updated.
##   skip - Do not build this port in the CI system.
##          This is added to ports that may be flaky or conflict with other
##          ports.  Please comment for why a port is skipped so it can be
##          removed when the issue is resolved.
##
##
## CI tested triplets:
##    arm64-windows
##    arm-uwp
##    x64-linux
##    x64-osx
##    x64-uwp
##    x64-windows
##    x64-windows-static
##    x64-windows-static-md
##    x86-windows
##

# Add new items alphabetically

# script ports
#vcpkg-cmake:arm64-windows=fail
#vcpkg-cmake:arm-uwp=fail
#vcpkg-cmake:x64-uwp=fail
#vcpkg-cmake:x64-windows-static=fail
#vcpkg-cmake:x64-windows-static-md=fail
#vcpkg-cmake:x86-windows=fail

#vcpkg-cmake-config:arm64-windows=fail
#vcpkg-cmake-config:arm-uwp=fail
#vcpkg-cmake-config:x64-uwp=fail
#vcpkg-cmake-config:x64-windows-static=fail
#vcpkg-cmake-config:x64-windows-static-md=fail
#vcpkg-cmake-config:x86-windows=fail

# other ports
# Cross compiling CI machine cannot run gen_test_char to generate apr_escape_test_char.h
apr:arm64-windows=fail
# Requires ATL for ARM64 to be installed in CI
azure-storage-cpp:arm64-windows=fail

aubio:arm-uwp=fail
aubio:x64-uwp=fail
# broken when `python` is python3, https://github.com/microsoft/vcpkg/issues/18937
bde:x64-linux=fail
bitserializer:x64-osx=fail
blitz:x64-uwp=fail
blitz:arm64-windows=fail
blitz:arm-uwp=fail
blosc:arm64-windows=fail
blosc:arm-uwp=fail
blosc:x64-uwp=fail
bond:arm-uwp=fail
bond:x64-osx=fail
bond:x64-uwp=fail
botan:x64-uwp=fail
breakpad:arm64-windows=fail
buck-yeh-bux:x64-linux=fail
buck-yeh-bux-mariadb-client:x64-linux=fail
caf:arm-uwp=fail
caf:x64-uwp=fail
caffe2:x86-windows=fail
caffe2:arm64-windows=fail
c-ares:arm-uwp=fail
c-ares:x64-uwp=fail
casclib:arm-uwp=fail
casclib:x64-uwp=fail
catch-classic:arm64-windows      = skip
catch-classic:arm-uwp            = skip
catch-classic:x64-linux          = skip
catch-classic:x64-osx            = skip
catch-classic:x64-uwp            = skip
catch-classic:x64-windows        = skip
catch-classic:x64-windows-static = skip
catch-classic:x64-windows-static-md=skip
catch-classic:x86-windows        = skip
bill-made-up-another-skip:x64-linux=skip"""  # note no trailing newline

X86_WINDOWS = Triplet.from_canonical_name("x86-windows")
X64_WINDOWS = Triplet.from_canonical_name("x64-windows")
X64_WINDOWS_STATIC = Triplet.from_canonical_name("x64-windows-static")
X64_WINDOWS_STATIC_MD = Triplet.from_canonical_name("x64-windows-static-md")
X64_UWP = Triplet.from_canonical_name("x64-uwp")
ARM64_WINDOWS = Triplet.from_canonical_name("arm64-windows")
ARM_UWP = Triplet.from_canonical_name("arm-uwp")
X64_OSX = Triplet.from_canonical_name("x64-osx")
X64_LINUX = Triplet.from_canonical_name("x64-linux")

FAIL = CiBaselineState.FAIL
SKIP = CiBaselineState.SKIP

EXPECTED_FROM_EXAMPLE_INPUT = [
    CiBaselineLine("apr", ARM64_WINDOWS, FAIL),
    CiBaselineLine("azure-storage-cpp", ARM64_WINDOWS, FAIL),
    CiBaselineLine("aubio", ARM_UWP, FAIL),
    CiBaselineLine("aubio", X64_UWP, FAIL),
    CiBaselineLine("bde", X64_LINUX, FAIL),
    CiBaselineLine("bitserializer", X64_OSX, FAIL),
    CiBaselineLine("blitz", X64_UWP, FAIL),
    CiBaselineLine("blitz", ARM64_WINDOWS, FAIL),
    CiBaselineLine("blitz", ARM_UWP, FAIL),
    CiBaselineLine("blosc", ARM64_WINDOWS, FAIL),
    CiBaselineLine("blosc", ARM_UWP, FAIL),
    CiBaselineLine("blosc", X64_UWP, FAIL),
    CiBaselineLine("bond", ARM_UWP, FAIL),
    CiBaselineLine("bond", X64_OSX, FAIL),
    CiBaselineLine("bond", X64_UWP, FAIL),
    CiBaselineLine("botan", X64_UWP, FAIL),
    CiBaselineLine("breakpad", ARM64_WINDOWS, FAIL),
    CiBaselineLine("buck-yeh-bux", X64_LINUX, FAIL),
    CiBaselineLine("buck-yeh-bux-mariadb-client", X64_LINUX, FAIL),
    CiBaselineLine("caf", ARM_UWP, FAIL),
    CiBaselineLine("caf", X64_UWP, FAIL),
    CiBaselineLine("caffe2", X86_WINDOWS, FAIL),
    CiBaselineLine("caffe2", ARM64_WINDOWS, FAIL),
    CiBaselineLine("c-ares", ARM_UWP, FAIL),
    CiBaselineLine("c-ares", X64_UWP, FAIL),
    CiBaselineLine("casclib", ARM_UWP, FAIL),
    CiBaselineLine("casclib", X64_UWP, FAIL),
    CiBaselineLine("catch-classic", ARM64_WINDOWS, SKIP),
    CiBaselineLine("catch-classic", ARM_UWP, SKIP),
    CiBaselineLine("catch-classic", X64_LINUX, SKIP),
    CiBaselineLine("catch-classic", X64_OSX, SKIP),
    CiBaselineLine("catch-classic", X64_UWP, SKIP),
    CiBaselineLine("catch-classic", X64_WINDOWS, SKIP),
    CiBaselineLine("catch-classic", X64_WINDOWS_STATIC, SKIP),
    CiBaselineLine("catch-classic", X64_WINDOWS_STATIC_MD, SKIP),
    CiBaselineLine("catch-classic", X86_WINDOWS, SKIP),
    CiBaselineLine("bill-made-up-another-skip", X64_LINUX, SKIP),
]


@pytest.fixture
def example_input() -> str:
    """A real-world baseline prefix, without a trailing newline."""
    return EXAMPLE_INPUT


@pytest.fixture
def expected_from_example_input() -> list[CiBaselineLine]:
    """Entries parsed from ``example_input``, in file order."""
    return list(EXPECTED_FROM_EXAMPLE_INPUT)


@pytest.fixture
def baseline_file(tmp_path: Path) -> Path:
    """Write ``EXAMPLE_INPUT`` to a baseline file."""
    path = tmp_path / "ci.baseline.txt"
    path.write_text(EXAMPLE_INPUT + "\n", encoding="utf-8")
    return path


@pytest.fixture
def broken_baseline_file(tmp_path: Path) -> Path:
    """A baseline file whose second entry is malformed."""
    path = tmp_path / "broken.baseline.txt"
    path.write_text("zlib:x64-linux=fail\nzlib:x64-linux=pass\n", encoding="utf-8")
    return path
