"""Parser configuration.

ParserConfig is a frozen dataclass — immutable after creation and
passed optionally to :func:`biscuit.parser.parse_set_cookie`.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from biscuit.cookies import SameSite
from biscuit.dates import utc_now


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Parser configuration. Immutable after creation.

    Substitute the clock to make ``Max-Age`` resolution deterministic::

        config = ParserConfig(clock=lambda: datetime(2024, 1, 1, tzinfo=UTC))
    """

    # Source of the creation instant that Max-Age is measured from
    clock: Callable[[], datetime] = utc_now

    # Policy applied when the header carries no SameSite attribute
    default_same_site: SameSite = SameSite.LAX


DEFAULT_CONFIG = ParserConfig()
