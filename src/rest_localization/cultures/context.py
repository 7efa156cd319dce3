"""Current culture state scoped per thread or process wide.

Per-thread state lives in a ContextVar, so every thread and every asyncio
task sees its own value, the same way structlog keeps the request_id.
Process-wide state is one shared cell: concurrent writers race and the last
write wins for every caller. Use it only when a single global culture is
really wanted.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
import threading

from rest_localization.core.exceptions import InvalidArgumentError, UnknownCultureError
from rest_localization.core.logging import get_logger
from rest_localization.cultures.catalog import CultureCatalog, ambient_culture
from rest_localization.cultures.models import CultureContextKind

logger = get_logger(__name__)


class _ProcessCulture:
    """Lock-guarded shared culture cell."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: str | None = None

    def get(self) -> str | None:
        with self._lock:
            return self._value

    def get_or_init(self, initial: str) -> str:
        with self._lock:
            if self._value is None:
                self._value = initial
            return self._value

    def set(self, value: str | None) -> str | None:
        with self._lock:
            previous = self._value
            self._value = value
            return previous


class CultureContext:
    """Tracks the current culture of a catalog.

    Culture and UI culture always move together.
    """

    def __init__(
        self, catalog: CultureCatalog, kind: CultureContextKind | None = None
    ) -> None:
        self.catalog = catalog
        self.kind = kind or catalog.context_kind
        self._thread_culture: ContextVar[str | None] = ContextVar(
            f"current_culture_{id(self):x}", default=None
        )
        self._process_culture = _ProcessCulture()

    def _initial_culture(self) -> str:
        ambient = ambient_culture(self.kind)
        if ambient and ambient in self.catalog:
            entry = self.catalog.get_culture(ambient)
            if entry is not None:
                return entry.identifier
        return self.catalog.default_culture

    def current_culture(self) -> str:
        """Current culture, lazily initialized on first read."""
        if self.kind is CultureContextKind.PROCESS_WIDE:
            return self._process_culture.get_or_init(self._initial_culture())
        culture = self._thread_culture.get()
        if culture is None:
            culture = self._initial_culture()
            self._thread_culture.set(culture)
        return culture

    def current_ui_culture(self) -> str:
        return self.current_culture()

    def _validate(self, name: str) -> str:
        if not name or not name.strip():
            raise InvalidArgumentError("name")
        entry = self.catalog.get_culture(name.strip())
        if entry is None:
            raise UnknownCultureError(name)
        return entry.identifier

    def set_current_culture(self, name: str) -> None:
        """Change the current culture of this scope.

        Raises:
            InvalidArgumentError: if ``name`` is blank.
            UnknownCultureError: if ``name`` is not a catalog culture.
        """
        culture = self._validate(name)
        if self.kind is CultureContextKind.PROCESS_WIDE:
            self._process_culture.set(culture)
        else:
            self._thread_culture.set(culture)
        logger.debug("current_culture_changed", culture=culture, kind=self.kind.value)

    @contextmanager
    def scoped(self, name: str) -> Iterator[str]:
        """Use ``name`` as current culture inside the block.

        The previous value is restored on exit. For process-wide contexts the
        change is visible to every concurrent caller while the block runs.
        """
        culture = self._validate(name)
        if self.kind is CultureContextKind.PROCESS_WIDE:
            previous = self._process_culture.set(culture)
            try:
                yield culture
            finally:
                self._process_culture.set(previous)
            return

        token = self._thread_culture.set(culture)
        try:
            yield culture
        finally:
            self._thread_culture.reset(token)
