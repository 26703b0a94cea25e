"""Cookie configuration.

CookieConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from crumb.http.cookies import Cookie


@dataclass(frozen=True, slots=True)
class CookieConfig:
    """Cookie handling configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = CookieConfig(enable_validation=True, validation_key="s3cr3t")
    """

    # Validation — sign outgoing values, drop incoming values with a bad signature
    validation_key: str = ""
    enable_validation: bool = False

    # Response policy — return False to keep a staged cookie out of the headers
    policy: "Callable[[Cookie], bool] | None" = None
