"""!
@brief Aggregate version record.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from . import constants


@dataclass(frozen=True)
class VersionRecord:
    """!
    @brief Result of :meth:`VersionInfoProvider.get_all`.
    @details ``keys`` lists the record keys populated by the active profile in
    their fixed order; fields outside the profile stay ``None``.
    """

    version: str
    date: str
    license: str
    authors: Tuple[str, ...]
    name: Optional[str] = None
    description: Optional[str] = None
    runtime_version: Optional[str] = None
    package_manager_version: Optional[str] = None
    dependency_version: Optional[str] = None
    keys: Tuple[str, ...] = field(default=constants.RECORD_KEYS)

    def as_dict(self) -> Dict[str, object]:
        """!
        @brief Ordered mapping keyed by the record keys of the active profile.
        """

        values: Dict[str, object] = {
            constants.INDEX_NAME: self.name,
            constants.INDEX_DESCRIPTION: self.description,
            constants.INDEX_VERSION: self.version,
            constants.INDEX_DATE: self.date,
            constants.INDEX_LICENSE: self.license,
            constants.INDEX_AUTHORS: list(self.authors),
            constants.INDEX_RUNTIME: self.runtime_version,
            constants.INDEX_PACKAGE_MANAGER: self.package_manager_version,
            constants.INDEX_DEPENDENCY: self.dependency_version,
        }
        return {key: values[key] for key in constants.RECORD_KEYS if key in self.keys}
