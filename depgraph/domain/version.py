"""
Package version value object for depgraph.

Versions come from repository metadata as plain strings ("1.2.3", "2.0-r1",
"scm", "1.4-scm"). PackageVersion parses them once so that candidates can be
sorted, and exposes the live/SCM flag used by version selection.
"""

import re
from dataclasses import dataclass, field
from typing import Tuple

from packaging.version import Version, InvalidVersion


SCM_SUFFIX = "-scm"

# 9999, 99999, ... are the conventional "live" release numbers
_NINES_RE = re.compile(r"^9{4,}$")

# _pN patch level, optionally followed by a -rN revision
_PATCH_RE = re.compile(r"_p(\d*)(?:-r(\d+))?$")


class InvalidPackageVersionError(ValueError):
    """Raised when a version string cannot be parsed."""
    pass


@dataclass(frozen=True)
class PackageVersion:
    """
    Totally ordered package version.

    Ordering:
        - numbered releases compare with PEP 440 rules ("-rN" and "_pN" are post releases)
        - "X-scm" sorts directly above "X"
        - a bare "scm" sorts above every numbered version

    Examples:
        PackageVersion.parse("1.2.3") < PackageVersion.parse("1.10")
        PackageVersion.parse("1.2") < PackageVersion.parse("1.2-scm")
        PackageVersion.parse("scm").is_scm -> True
    """

    text: str = field(compare=False)
    _key: Tuple = field(repr=False)

    @classmethod
    def parse(cls, text: str) -> 'PackageVersion':
        """
        Parse a version string.

        Args:
            text: Version as written in the repository metadata

        Returns:
            Parsed PackageVersion

        Raises:
            InvalidPackageVersionError: If the release part is not a valid version
        """
        text = str(text).strip()
        if not text:
            raise InvalidPackageVersionError("empty version string")

        if text == "scm":
            return cls(text=text, _key=(1, Version("0"), 1))

        release = text[:-len(SCM_SUFFIX)] if text.endswith(SCM_SUFFIX) else text
        try:
            parsed = Version(_pep440_release(release))
        except InvalidVersion as e:
            raise InvalidPackageVersionError(f"invalid version {text!r}") from e

        return cls(text=text, _key=(0, parsed, int(cls._scm_text(text))))

    @staticmethod
    def _scm_text(text: str) -> bool:
        if text == "scm" or text.endswith(SCM_SUFFIX):
            return True
        head = text.split("-", 1)[0]
        return bool(_NINES_RE.match(head))

    @property
    def is_scm(self) -> bool:
        """True for live versions tracking an unreleased source snapshot."""
        return self._scm_text(self.text)

    def __lt__(self, other: 'PackageVersion') -> bool:
        if not isinstance(other, PackageVersion):
            return NotImplemented
        return self._key < other._key

    def __le__(self, other: 'PackageVersion') -> bool:
        if not isinstance(other, PackageVersion):
            return NotImplemented
        return self._key <= other._key

    def __gt__(self, other: 'PackageVersion') -> bool:
        if not isinstance(other, PackageVersion):
            return NotImplemented
        return self._key > other._key

    def __ge__(self, other: 'PackageVersion') -> bool:
        if not isinstance(other, PackageVersion):
            return NotImplemented
        return self._key >= other._key

    def __str__(self) -> str:
        return self.text


def _pep440_release(release: str) -> str:
    """
    Spell a _pN patch level as a post release ("1.2_p1" -> "1.2.post1").

    A revision after a patch level becomes the local segment, so
    "1.2_p1-r2" sorts between "1.2_p1" and "1.2_p2".
    """
    match = _PATCH_RE.search(release)
    if not match:
        return release
    patched = f"{release[:match.start()]}.post{match.group(1) or 0}"
    if match.group(2):
        patched += f"+{match.group(2)}"
    return patched
