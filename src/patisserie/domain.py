"""Domain initialization and configuration."""

from protean.domain import Domain

from patisserie.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
patisserie = Domain(name="patisserie")
