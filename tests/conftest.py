# topmark:header:start
#
#   project      : BuildStats
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the BuildStats test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
ensuring consistent and verbose logging output during testing.

Notes:
    Tests should respect the immutable/mutable options split:

    - Build options using `buildstats.config.MutableStatsOptions` (mutable), then
      `freeze()` into a `buildstats.config.StatsOptions` for pipeline calls.
    - Do **not** mutate a frozen `StatsOptions`. If you need to tweak one,
      call `StatsOptions.thaw()`, edit the returned builder, then `freeze()` again.
    - Registries built here are private to the test; the process-wide
      `default_registry()` is only used by the public API tests.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from buildstats.catalog import register_default_catalog
from buildstats.config import MutableStatsOptions, logging
from buildstats.hooks import HookRegistry
from buildstats.session import (
    BundleGroup,
    DeploymentGroup,
    InMemoryBuildResult,
    OutputArtifact,
    Reference,
    WorkUnit,
)

if TYPE_CHECKING:
    from buildstats.config import StatsOptions

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_pipeline: DecoratorType[Any] = as_typed_mark(pytest.mark.pipeline)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.hookimpl`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.hookimpl`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def fixture(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.fixture`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.fixture`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.fixture`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return as_typed_mark(pytest.fixture(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_buildstats_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the BuildStats log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv("BUILDSTATS_LOG_LEVEL", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Configure pytest settings and customize logging for the test suite.

    This function sets the logging level to TRACE for all tests,
    ensuring detailed output is captured during test execution.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


def make_options(**values: Any) -> StatsOptions:
    """Return frozen options holding exactly ``values`` (no preset layer).

    Args:
        **values (Any): Option values keyed by option name.

    Returns:
        StatsOptions: Frozen options.
    """
    return MutableStatsOptions.from_mapping(values).freeze()


def make_registry(*, freeze: bool = True) -> HookRegistry:
    """Return a private registry holding the default catalog.

    Args:
        freeze (bool): Freeze the registry before returning it.

    Returns:
        HookRegistry: The populated registry.
    """
    registry: HookRegistry = register_default_catalog(HookRegistry(name="test"))
    return registry.freeze() if freeze else registry


def make_main_result(**session: Any) -> InMemoryBuildResult:
    """Return a one-asset, one-chunk build: ``main.js`` (120 bytes) in chunk ``0``.

    Args:
        **session (Any): Overrides for the session fields (``hash``, ``name``, ...).

    Returns:
        InMemoryBuildResult: The populated build result.
    """
    result = InMemoryBuildResult(start_time=1000, end_time=1120, **session)
    main = result.add_bundle_group(
        BundleGroup(id=0, names=("main",), files=("main.js",), entry=True)
    )
    result.add_asset(OutputArtifact("main.js", 120), emitted=True)
    result.add_work_unit(
        WorkUnit("/app/src/index.js", "./src/index.js", sizes={"javascript": 120}),
        unit_id=0,
        groups=[main],
        root_in=[main],
        depth=0,
        pre_order_index=0,
        post_order_index=0,
    )
    result.add_entrypoint(DeploymentGroup("main", chunks=(main,)))
    return result


def make_app_result() -> InMemoryBuildResult:
    """Return a small two-chunk build with an import graph and a lazy chunk.

    Layout:
        - chunk ``0`` (``main``): ``./src/index.js`` importing ``./src/util.js``;
        - chunk ``1`` (``lazy``): ``./src/lazy.js``, imported by ``./src/index.js``;
        - assets ``main.js``, ``main.js.map`` and ``lazy.js`` (over the size limit).

    Returns:
        InMemoryBuildResult: The populated build result.
    """
    result = InMemoryBuildResult(
        hash="4f2a9c",
        version="5.90.0",
        start_time=1000,
        end_time=1250,
        public_path="/static/",
        output_path="/app/dist",
    )
    main = result.add_bundle_group(
        BundleGroup(id=0, names=("main",), files=("main.js",), entry=True)
    )
    lazy = result.add_bundle_group(
        BundleGroup(id=1, names=("lazy",), files=("lazy.js",), initial=False)
    )
    result.add_asset(OutputArtifact("main.js", 2048), emitted=True)
    result.add_asset(OutputArtifact("main.js.map", 4096), emitted=True)
    result.add_asset(OutputArtifact("lazy.js", 300000), emitted=True, over_size_limit=True)

    index = result.add_work_unit(
        WorkUnit(
            "/app/src/index.js",
            "./src/index.js",
            sizes={"javascript": 1024},
            provided_exports=(),
        ),
        unit_id=0,
        groups=[main],
        root_in=[main],
        depth=0,
        pre_order_index=0,
        post_order_index=2,
        used_exports=(),
    )
    util = result.add_work_unit(
        WorkUnit(
            "/app/src/util.js",
            "./src/util.js",
            sizes={"javascript": 512},
            provided_exports=("add", "sub"),
        ),
        unit_id=1,
        groups=[main],
        issuer=index,
        depth=1,
        pre_order_index=1,
        post_order_index=0,
        used_exports=("add",),
    )
    lazy_unit = result.add_work_unit(
        WorkUnit("/app/src/lazy.js", "./src/lazy.js", sizes={"javascript": 2048}),
        unit_id=2,
        groups=[lazy],
        root_in=[lazy],
        issuer=index,
        depth=1,
        pre_order_index=2,
        post_order_index=1,
        optimization_bailout=("ModuleConcatenation bailout: Module is an entry point",),
    )
    result.add_reference(
        util, Reference(index, "harmony side effect evaluation", "./util", "1:0-30")
    )
    result.add_reference(lazy_unit, Reference(index, "import()", "./lazy", "3:2-18"))
    result.add_reference(index, Reference(None, "entry", "./src/index.js", "main"))

    result.add_entrypoint(DeploymentGroup("main", chunks=(main,)))
    result.add_named_group(DeploymentGroup("lazy", chunks=(lazy,)))
    return result


@fixture()
def registry() -> HookRegistry:
    """Return a frozen private registry holding the default catalog."""
    return make_registry()
