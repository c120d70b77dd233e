# topmark:header:start
#
#   project      : BuildStats
#   file         : extractors.py
#   file_relpath : src/buildstats/catalog/extractors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Default extract handlers: build session, assets, groups and work units.

Handlers are grouped per item name (``session``, ``asset``, ``chunkGroup``,
``chunk``, ``module``, ``moduleIssuer``, ``moduleReason``) and per option
key. The ``"_"`` key registers an unconditional handler; any other key gates
the handler on that option. Because registrations match every dotted suffix
of a type path, a handler registered for ``module`` serves top-level
modules, chunk modules and nested modules alike.

All handlers share the signature ``(obj, data, ctx, options, factory)`` and
write report fields (camelCase) into ``obj``.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Final

from buildstats.config.keys import STRUCTURED_KEYS, Opt
from buildstats.config.logging import get_logger
from buildstats.config.options import StatsOptions
from buildstats.hooks.gates import EnabledOption, gate_for
from buildstats.hooks.kinds import HookKind
from buildstats.session.model import id_sort_key

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from buildstats.config.logging import BuildStatsLogger
    from buildstats.extraction.context import ExtractionContext
    from buildstats.extraction.factory import ExtractionPipeline
    from buildstats.hooks.registry import HookRegistry
    from buildstats.session.model import (
        BundleGroup,
        DeploymentGroup,
        OutputArtifact,
        Reference,
        WorkUnit,
    )
    from buildstats.session.protocols import BuildResult

logger: BuildStatsLogger = get_logger(__name__)

PLUGIN_NAME: Final[str] = "extractors"

Extractor = Callable[..., None]


# ------------------ session ------------------


def _session_base(
    obj: dict[str, Any],
    result: BuildResult,
    ctx: ExtractionContext,  # noqa: ARG001
    options: StatsOptions,  # noqa: ARG001
    factory: ExtractionPipeline,  # noqa: ARG001
) -> None:
    if result.needs_additional_pass:
        obj["needAdditionalPass"] = True
    if result.name is not None:
        obj["name"] = result.name


def _session_hash(obj: dict[str, Any], result: BuildResult, *_: Any) -> None:
    obj["hash"] = result.hash


def _session_version(obj: dict[str, Any], result: BuildResult, *_: Any) -> None:
    obj["version"] = result.version


def _session_timings(
    obj: dict[str, Any], result: BuildResult, ctx: ExtractionContext, *_: Any
) -> None:
    scope: ExtractionContext = ctx.with_result(result)
    obj["time"] = scope.end_time - scope.start_time


def _session_built_at(
    obj: dict[str, Any], result: BuildResult, ctx: ExtractionContext, *_: Any
) -> None:
    obj["builtAt"] = ctx.with_result(result).end_time


def _session_public_path(obj: dict[str, Any], result: BuildResult, *_: Any) -> None:
    obj["publicPath"] = result.public_path


def _session_output_path(obj: dict[str, Any], result: BuildResult, *_: Any) -> None:
    obj["outputPath"] = result.output_path


def _session_assets(
    obj: dict[str, Any],
    result: BuildResult,
    ctx: ExtractionContext,
    options: StatsOptions,  # noqa: ARG001
    factory: ExtractionPipeline,
) -> None:
    obj["assets"], obj["filteredAssets"] = factory.create_counted(
        f"{ctx.type}.assets", list(result.assets()), ctx.with_result(result)
    )


def _session_chunks(
    obj: dict[str, Any],
    result: BuildResult,
    ctx: ExtractionContext,
    options: StatsOptions,  # noqa: ARG001
    factory: ExtractionPipeline,
) -> None:
    groups: list[BundleGroup] = list(result.bundle_groups(key=lambda g: id_sort_key(g.id)))
    obj["chunks"] = factory.create(f"{ctx.type}.chunks", groups, ctx.with_result(result))


def _session_modules(
    obj: dict[str, Any],
    result: BuildResult,
    ctx: ExtractionContext,
    options: StatsOptions,  # noqa: ARG001
    factory: ExtractionPipeline,
) -> None:
    obj["modules"], obj["filteredModules"] = factory.create_counted(
        f"{ctx.type}.modules", list(result.work_units()), ctx.with_result(result)
    )


def _session_entrypoints(
    obj: dict[str, Any],
    result: BuildResult,
    ctx: ExtractionContext,
    options: StatsOptions,  # noqa: ARG001
    factory: ExtractionPipeline,
) -> None:
    obj["entrypoints"] = factory.create(
        f"{ctx.type}.entrypoints", list(result.entrypoints().values()), ctx.with_result(result)
    )


def _session_chunk_groups(
    obj: dict[str, Any],
    result: BuildResult,
    ctx: ExtractionContext,
    options: StatsOptions,  # noqa: ARG001
    factory: ExtractionPipeline,
) -> None:
    obj["namedChunkGroups"] = factory.create(
        f"{ctx.type}.namedChunkGroups",
        list(result.named_groups().values()),
        ctx.with_result(result),
    )


def _session_errors(obj: dict[str, Any], result: BuildResult, *_: Any) -> None:
    obj["errors"] = list(result.errors())


def _session_warnings(obj: dict[str, Any], result: BuildResult, *_: Any) -> None:
    obj["warnings"] = list(result.warnings())


def _session_children(
    obj: dict[str, Any],
    result: BuildResult,
    ctx: ExtractionContext,
    options: StatsOptions,  # noqa: ARG001
    factory: ExtractionPipeline,
) -> None:
    obj["children"] = factory.create(
        f"{ctx.type}.children", list(result.children()), ctx.with_result(result)
    )


def child_session_factory(
    child: BuildResult,  # noqa: ARG001
    ctx: ExtractionContext,
    options: StatsOptions,
    factory: ExtractionPipeline,
) -> ExtractionPipeline | None:
    """Return the pipeline building a child session, or None to keep the parent's.

    ``children`` set to nested options applies them to every child; a
    sequence applies them by position. Children beyond the end of the
    sequence, and ``children = true``, are built with the parent's options.
    """
    setting = options.children
    if isinstance(setting, StatsOptions):
        return factory.child(setting)
    if isinstance(setting, tuple):
        if ctx.index is not None and ctx.index < len(setting):
            return factory.child(setting[ctx.index])
        logger.debug("No positional options for child %s; using the parent's", ctx.index)
    return None


# ------------------ asset ------------------


def _asset_base(
    obj: dict[str, Any],
    asset: OutputArtifact,
    ctx: ExtractionContext,
    *_: Any,
) -> None:
    groups: list[BundleGroup] = [g for g in ctx.result.bundle_groups() if asset.name in g.files]
    obj["name"] = asset.name
    obj["size"] = asset.size
    obj["chunks"] = sorted({g.id for g in groups if g.id is not None}, key=id_sort_key)
    obj["chunkNames"] = sorted({g.name for g in groups if g.name})
    obj["emitted"] = ctx.result.is_emitted(asset)


def _asset_performance(
    obj: dict[str, Any],
    asset: OutputArtifact,
    ctx: ExtractionContext,
    *_: Any,
) -> None:
    obj["isOverSizeLimit"] = ctx.result.is_over_size_limit(asset)


# ------------------ chunkGroup (deployment group) ------------------


def _group_summary(group: DeploymentGroup) -> dict[str, Any]:
    return {
        "name": group.name,
        "chunks": [chunk.id for chunk in group.chunks],
        "assets": group.files,
    }


def _chunk_group_base(
    obj: dict[str, Any],
    group: DeploymentGroup,
    ctx: ExtractionContext,
    *_: Any,
) -> None:
    children: Mapping[str, Sequence[DeploymentGroup]] = ctx.result.child_groups(group)
    obj.update(
        {
            "name": group.name,
            "chunks": [chunk.id for chunk in group.chunks],
            "assets": group.files,
            "children": {
                key: [_group_summary(child) for child in groups]
                for key, groups in children.items()
            },
            "childAssets": {
                key: list(dict.fromkeys(f for child in groups for f in child.files))
                for key, groups in children.items()
            },
        }
    )


def _chunk_group_performance(
    obj: dict[str, Any],
    group: DeploymentGroup,
    ctx: ExtractionContext,
    *_: Any,
) -> None:
    files: set[str] = set(group.files)
    obj["isOverSizeLimit"] = any(
        ctx.result.is_over_size_limit(asset)
        for asset in ctx.result.assets()
        if asset.name in files
    )


# ------------------ chunk (bundle group) ------------------


def _chunk_base(
    obj: dict[str, Any],
    group: BundleGroup,
    ctx: ExtractionContext,
    *_: Any,
) -> None:
    obj.update(
        {
            "id": group.id,
            "rendered": group.rendered,
            "initial": group.initial,
            "entry": group.entry,
            "size": sum(unit.size for unit in ctx.result.units_of_group(group)),
            "names": list(group.names),
            "files": list(group.files),
            "hash": group.hash,
        }
    )


def _chunk_modules(
    obj: dict[str, Any],
    group: BundleGroup,
    ctx: ExtractionContext,
    options: StatsOptions,  # noqa: ARG001
    factory: ExtractionPipeline,
) -> None:
    units: list[WorkUnit] = list(ctx.result.units_of_group(group))
    obj["modules"], obj["filteredModules"] = factory.create_counted(
        f"{ctx.type}.modules", units, ctx
    )


def _chunk_root_modules(
    obj: dict[str, Any],
    group: BundleGroup,
    ctx: ExtractionContext,
    options: StatsOptions,  # noqa: ARG001
    factory: ExtractionPipeline,
) -> None:
    roots: list[WorkUnit] = list(ctx.result.root_units_of_group(group))
    obj["rootModules"], obj["filteredRootModules"] = factory.create_counted(
        f"{ctx.type}.rootModules", roots, ctx
    )
    obj["nonRootModules"] = len(ctx.result.units_of_group(group)) - len(roots)


# ------------------ module (work unit) ------------------


def issuer_chain(result: BuildResult, unit: WorkUnit) -> list[WorkUnit]:
    """Return the issuers of ``unit``, outermost first.

    A cycle in the issuer relation ends the chain at the first repeated unit.
    """
    chain: list[WorkUnit] = []
    seen: set[int] = {id(unit)}
    current: WorkUnit | None = result.issuer(unit)
    while current is not None and id(current) not in seen:
        chain.append(current)
        seen.add(id(current))
        current = result.issuer(current)
    chain.reverse()
    return chain


def _module_base(
    obj: dict[str, Any],
    unit: WorkUnit,
    ctx: ExtractionContext,
    options: StatsOptions,  # noqa: ARG001
    factory: ExtractionPipeline,
) -> None:
    result: BuildResult = ctx.result
    pre_order: int | None = result.pre_order_index(unit)
    post_order: int | None = result.post_order_index(unit)
    obj.update(
        {
            "id": result.unit_id(unit),
            "identifier": unit.identifier,
            "name": unit.name,
            "index": pre_order,
            "preOrderIndex": pre_order,
            "index2": post_order,
            "postOrderIndex": post_order,
            "size": unit.size,
            "sizes": dict(unit.sizes),
            "cacheable": unit.cacheable,
            "built": result.is_built(unit),
            "optional": unit.optional,
            "runtime": unit.type == "runtime",
            "chunks": [group.id for group in result.groups_of_unit(unit)],
        }
    )
    issuer: WorkUnit | None = result.issuer(unit)
    if issuer is not None:
        obj["issuer"] = issuer.identifier
        obj["issuerId"] = result.unit_id(issuer)
        obj["issuerName"] = issuer.name
        obj["issuerPath"] = factory.create(
            f"{ctx.type}.issuerPath", issuer_chain(result, unit), ctx
        )
    obj["failed"] = bool(unit.errors)
    obj["errors"] = len(unit.errors)
    obj["warnings"] = len(unit.warnings)


def _module_orphan(obj: dict[str, Any], unit: WorkUnit, ctx: ExtractionContext, *_: Any) -> None:
    if not ctx.type.endswith("module.modules[].module"):
        obj["orphan"] = not ctx.result.groups_of_unit(unit)


def _module_assets(obj: dict[str, Any], unit: WorkUnit, *_: Any) -> None:
    obj["assets"] = list(unit.assets)


def _module_reasons(
    obj: dict[str, Any],
    unit: WorkUnit,
    ctx: ExtractionContext,
    options: StatsOptions,  # noqa: ARG001
    factory: ExtractionPipeline,
) -> None:
    obj["reasons"] = factory.create(f"{ctx.type}.reasons", list(ctx.result.incoming(unit)), ctx)


def _module_used_exports(
    obj: dict[str, Any],
    unit: WorkUnit,
    ctx: ExtractionContext,
    *_: Any,
) -> None:
    used = ctx.result.used_exports(unit)
    obj["usedExports"] = used if used is None or isinstance(used, bool) else list(used)


def _module_provided_exports(obj: dict[str, Any], unit: WorkUnit, *_: Any) -> None:
    provided = unit.provided_exports
    obj["providedExports"] = list(provided) if provided is not None else None


def _module_optimization_bailout(
    obj: dict[str, Any],
    unit: WorkUnit,
    ctx: ExtractionContext,
    *_: Any,
) -> None:
    obj["optimizationBailout"] = list(ctx.result.optimization_bailout(unit))


def _module_depth(obj: dict[str, Any], unit: WorkUnit, ctx: ExtractionContext, *_: Any) -> None:
    obj["depth"] = ctx.result.depth(unit)


def _module_nested(
    obj: dict[str, Any],
    unit: WorkUnit,
    ctx: ExtractionContext,
    options: StatsOptions,  # noqa: ARG001
    factory: ExtractionPipeline,
) -> None:
    if unit.modules is not None:
        obj["modules"], obj["filteredModules"] = factory.create_counted(
            f"{ctx.type}.modules", list(unit.modules), ctx
        )


def _module_source(obj: dict[str, Any], unit: WorkUnit, *_: Any) -> None:
    if unit.source is not None:
        obj["source"] = unit.source


# ------------------ moduleIssuer / moduleReason ------------------


def _module_issuer(obj: dict[str, Any], unit: WorkUnit, ctx: ExtractionContext, *_: Any) -> None:
    obj.update(
        {
            "id": ctx.result.unit_id(unit),
            "identifier": unit.identifier,
            "name": unit.name,
        }
    )


def _module_reason(
    obj: dict[str, Any],
    reference: Reference,
    ctx: ExtractionContext,
    *_: Any,
) -> None:
    origin: WorkUnit | None = reference.origin
    obj.update(
        {
            "moduleIdentifier": origin.identifier if origin is not None else None,
            "module": origin.name if origin is not None else None,
            "moduleId": ctx.result.unit_id(origin) if origin is not None else None,
            "moduleName": origin.name if origin is not None else None,
            "type": reference.type,
            "userRequest": reference.user_request,
            "loc": reference.loc,
            "explanation": reference.explanation,
        }
    )


# ------------------ registration tables ------------------

SIMPLE_EXTRACTORS: Final[Mapping[str, Mapping[str, Extractor]]] = MappingProxyType(
    {
        "session": {
            "_": _session_base,
            Opt.HASH: _session_hash,
            Opt.VERSION: _session_version,
            Opt.TIMINGS: _session_timings,
            Opt.BUILT_AT: _session_built_at,
            Opt.PUBLIC_PATH: _session_public_path,
            Opt.OUTPUT_PATH: _session_output_path,
            Opt.ASSETS: _session_assets,
            Opt.CHUNKS: _session_chunks,
            Opt.MODULES: _session_modules,
            Opt.ENTRYPOINTS: _session_entrypoints,
            Opt.CHUNK_GROUPS: _session_chunk_groups,
            Opt.ERRORS: _session_errors,
            Opt.WARNINGS: _session_warnings,
            Opt.CHILDREN: _session_children,
        },
        "asset": {
            "_": _asset_base,
            Opt.PERFORMANCE: _asset_performance,
        },
        "chunkGroup": {
            "_": _chunk_group_base,
            Opt.PERFORMANCE: _chunk_group_performance,
        },
        "chunk": {
            "_": _chunk_base,
            Opt.CHUNK_MODULES: _chunk_modules,
            Opt.CHUNK_ROOT_MODULES: _chunk_root_modules,
        },
        "module": {
            "_": _module_base,
            Opt.ORPHAN_MODULES: _module_orphan,
            Opt.MODULE_ASSETS: _module_assets,
            Opt.REASONS: _module_reasons,
            Opt.USED_EXPORTS: _module_used_exports,
            Opt.PROVIDED_EXPORTS: _module_provided_exports,
            Opt.OPTIMIZATION_BAILOUT: _module_optimization_bailout,
            Opt.DEPTH: _module_depth,
            Opt.NESTED_MODULES: _module_nested,
            Opt.SOURCE: _module_source,
        },
        "moduleIssuer": {
            "_": _module_issuer,
        },
        "moduleReason": {
            "_": _module_reason,
        },
    }
)

ITEM_NAMES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "session.children[]": "session",
        "session.modules[]": "module",
        "session.entrypoints[]": "chunkGroup",
        "session.namedChunkGroups[]": "chunkGroup",
        "chunk.modules[]": "module",
        "chunk.rootModules[]": "module",
        "module.modules[]": "module",
        "session.chunks[]": "chunk",
        "session.assets[]": "asset",
        "module.issuerPath[]": "moduleIssuer",
        "module.reasons[]": "moduleReason",
    }
)


def merge_by_name(items: Sequence[Mapping[str, Any]], ctx: ExtractionContext) -> dict[str, Any]:
    """Collapse named report nodes into a mapping keyed by ``name``.

    On duplicate names the last node wins and keeps the position of the first.
    """
    merged: dict[str, Any] = {}
    for item in items:
        name = item.get("name")
        if name in merged:
            logger.warning("Duplicate name %r while merging '%s'; keeping the last", name, ctx.type)
        merged[name] = item
    return merged


MERGERS: Final[Mapping[str, Callable[..., Any]]] = MappingProxyType(
    {
        "session.entrypoints": merge_by_name,
        "session.namedChunkGroups": merge_by_name,
    }
)


def constant_item_name(name: str) -> Callable[..., str]:
    """Return a getItemName handler that always answers ``name``."""

    def get_item_name(*_: Any) -> str:
        return name

    get_item_name.__qualname__ = f"constant_item_name({name!r})"
    return get_item_name


def register_extractors(registry: HookRegistry) -> None:
    """Register the default extract, getItemName, getItemFactory and merge handlers."""
    for item_name, by_option in SIMPLE_EXTRACTORS.items():
        for option, handler in by_option.items():
            registry.register(
                HookKind.EXTRACT,
                item_name,
                handler,
                gate=EnabledOption(option) if option in STRUCTURED_KEYS else gate_for(option),
                plugin=PLUGIN_NAME,
            )
    for type_path, item_name in ITEM_NAMES.items():
        registry.register(
            HookKind.GET_ITEM_NAME,
            type_path,
            constant_item_name(item_name),
            plugin=PLUGIN_NAME,
        )
    for type_path, merger in MERGERS.items():
        registry.register(HookKind.MERGE, type_path, merger, plugin=PLUGIN_NAME)
    registry.register(
        HookKind.GET_ITEM_FACTORY,
        "session.children[].session",
        child_session_factory,
        plugin=PLUGIN_NAME,
    )
