"""FastAPI dependency injection for nesting services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from fabricnest.application.commands import NestLayoutCommand
from fabricnest.domain import NestingEngine


@lru_cache(maxsize=1)
def get_engine() -> NestingEngine:
    """Get cached NestingEngine instance.

    The engine keeps no state between runs, so one instance serves every
    request.
    """
    return NestingEngine()


def get_nest_command(
    engine: Annotated[NestingEngine, Depends(get_engine)],
) -> NestLayoutCommand:
    """Dependency for NestLayoutCommand."""
    return NestLayoutCommand(engine=engine)


# Type aliases for cleaner endpoint signatures
NestCommandDep = Annotated[NestLayoutCommand, Depends(get_nest_command)]
