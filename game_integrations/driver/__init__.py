"""Versioned dispatch from abstract operations to integration scripts.

:func:`create_driver` is a closed match over the supported
:class:`~game_integrations.standards.IntegrationStandard` members.  Supporting a
new wire format means adding a member, a self-contained driver module and one
entry in ``_DRIVERS``; drivers bound to older standards are untouched.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Type

from ..exceptions import LoadError
from ..host import ScriptContext
from ..standards import IntegrationStandard
from .base import Capability, Driver
from .v1 import V1Driver

_DRIVERS = MappingProxyType({IntegrationStandard.V1: V1Driver})


def driver_class(standard: IntegrationStandard) -> Type[Driver]:
    try:
        return _DRIVERS[standard]
    except KeyError as exc:
        raise LoadError(f"No driver implements integration standard {standard!r}.") from exc


def create_driver(standard: IntegrationStandard, context: ScriptContext) -> Driver:
    """Bind ``context`` to the driver implementing ``standard``."""

    return driver_class(standard)(context)


__all__ = ["Capability", "Driver", "V1Driver", "create_driver", "driver_class"]
