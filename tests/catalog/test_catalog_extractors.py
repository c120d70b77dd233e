# topmark:header:start
#
#   project      : BuildStats
#   file         : test_catalog_extractors.py
#   file_relpath : tests/catalog/test_catalog_extractors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the default extractors run against in-memory builds."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from buildstats.catalog.extractors import issuer_chain, merge_by_name
from buildstats.extraction import ExtractionContext, ExtractionPipeline
from buildstats.session import BundleGroup, InMemoryBuildResult, OutputArtifact, WorkUnit
from tests.conftest import (
    make_app_result,
    make_main_result,
    make_options,
    make_registry,
    mark_pipeline,
)

if TYPE_CHECKING:
    import pytest

    from buildstats.session import BuildResult


def _tree(result: BuildResult, **options: Any) -> dict[str, Any]:
    pipeline = ExtractionPipeline(make_registry(), make_options(**options))
    return pipeline.create("session", result, ExtractionContext.for_result(result))


def _by_name(nodes: list[dict[str, Any]]) -> dict[str, dict[str, Any]]:
    return {node["name"]: node for node in nodes}


@mark_pipeline
def test_main_asset_tree() -> None:
    """Only the enabled field groups appear in the tree."""
    assert _tree(make_main_result(), assets=True, chunks=False) == {
        "assets": [
            {
                "name": "main.js",
                "size": 120,
                "chunks": [0],
                "chunkNames": ["main"],
                "emitted": True,
            }
        ],
        "filteredAssets": 0,
    }


@mark_pipeline
def test_empty_options_build_an_empty_session() -> None:
    """An unnamed session with no options yields an empty object."""
    assert _tree(make_main_result()) == {}


@mark_pipeline
def test_session_scalars() -> None:
    """Session facts are copied; the duration is derived from the session times."""
    tree = _tree(
        make_app_result(),
        hash=True,
        version=True,
        timings=True,
        built_at=True,
        public_path=True,
        output_path=True,
    )
    assert tree == {
        "hash": "4f2a9c",
        "version": "5.90.0",
        "time": 250,
        "builtAt": 1250,
        "publicPath": "/static/",
        "outputPath": "/app/dist",
    }


@mark_pipeline
def test_name_and_additional_pass_only_when_set() -> None:
    """``name`` and ``needAdditionalPass`` are omitted for their defaults."""
    tree = _tree(make_main_result(name="client", needs_additional_pass=True))
    assert tree == {"name": "client", "needAdditionalPass": True}


@mark_pipeline
def test_asset_performance_flags() -> None:
    """The performance option adds the size-limit flag per asset."""
    assets = _by_name(_tree(make_app_result(), assets=True, performance=True)["assets"])
    assert assets["lazy.js"]["isOverSizeLimit"] is True
    assert assets["main.js"]["isOverSizeLimit"] is False
    assert assets["main.js.map"]["chunks"] == []
    assert assets["main.js.map"]["chunkNames"] == []


@mark_pipeline
def test_exclude_assets_counts_hidden_assets() -> None:
    """Excluded assets are dropped and counted."""
    tree = _tree(make_app_result(), assets=True, exclude_assets=["*.map"])
    assert [a["name"] for a in tree["assets"]] == ["main.js", "lazy.js"]
    assert tree["filteredAssets"] == 1


@mark_pipeline
def test_exclusion_is_inactive_without_patterns() -> None:
    """Without patterns the filters are gated off."""
    tree = _tree(make_app_result(), assets=True, modules=True)
    assert tree["filteredAssets"] == 0
    assert tree["filteredModules"] == 0


@mark_pipeline
def test_entrypoints_merge_by_name() -> None:
    """Entry points become a mapping keyed by group name."""
    tree = _tree(make_app_result(), entrypoints=True, chunk_groups=True)
    assert tree["entrypoints"] == {
        "main": {
            "name": "main",
            "chunks": [0],
            "assets": ["main.js"],
            "children": {},
            "childAssets": {},
        }
    }
    assert list(tree["namedChunkGroups"]) == ["main", "lazy"]


def test_merge_by_name_keeps_first_position_and_last_value(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Duplicate names warn; the last node wins at the first position."""
    ctx = ExtractionContext.for_result(InMemoryBuildResult(), "session.entrypoints")
    items = [{"name": "a", "v": 1}, {"name": "b"}, {"name": "a", "v": 2}]
    with caplog.at_level(logging.WARNING):
        merged = merge_by_name(items, ctx)
    assert list(merged) == ["a", "b"]
    assert merged["a"]["v"] == 2
    assert "Duplicate name 'a'" in caplog.text


@mark_pipeline
def test_modules_and_issuers() -> None:
    """Modules carry graph facts; issuer fields exist only when there is an issuer."""
    modules = _by_name(_tree(make_app_result(), modules=True)["modules"])

    index = modules["./src/index.js"]
    assert index["id"] == 0
    assert index["identifier"] == "/app/src/index.js"
    assert index["chunks"] == [0]
    assert index["size"] == 1024
    assert index["built"] is True
    assert index["runtime"] is False
    assert (index["index"], index["index2"]) == (0, 2)
    assert "issuer" not in index

    util = modules["./src/util.js"]
    assert util["issuer"] == "/app/src/index.js"
    assert util["issuerId"] == 0
    assert util["issuerName"] == "./src/index.js"
    assert util["issuerPath"] == [
        {"id": 0, "identifier": "/app/src/index.js", "name": "./src/index.js"}
    ]
    assert "reasons" not in util


@mark_pipeline
def test_module_reasons() -> None:
    """Reasons describe incoming references, including entry references."""
    modules = _by_name(_tree(make_app_result(), modules=True, reasons=True)["modules"])
    assert modules["./src/util.js"]["reasons"] == [
        {
            "moduleIdentifier": "/app/src/index.js",
            "module": "./src/index.js",
            "moduleId": 0,
            "moduleName": "./src/index.js",
            "type": "harmony side effect evaluation",
            "userRequest": "./util",
            "loc": "1:0-30",
            "explanation": None,
        }
    ]
    entry_reason = modules["./src/index.js"]["reasons"][0]
    assert entry_reason["type"] == "entry"
    assert entry_reason["moduleId"] is None


@mark_pipeline
def test_module_exports_depth_and_bailouts() -> None:
    """Optional module fields follow their own options."""
    modules = _by_name(
        _tree(
            make_app_result(),
            modules=True,
            used_exports=True,
            provided_exports=True,
            depth=True,
            optimization_bailout=True,
        )["modules"]
    )
    util = modules["./src/util.js"]
    assert util["usedExports"] == ["add"]
    assert util["providedExports"] == ["add", "sub"]
    assert util["depth"] == 1

    lazy = modules["./src/lazy.js"]
    assert lazy["usedExports"] is None
    assert lazy["providedExports"] is None
    assert lazy["optimizationBailout"] == ["ModuleConcatenation bailout: Module is an entry point"]


@mark_pipeline
def test_exclude_modules_matches_names_and_identifiers() -> None:
    """Patterns match the short name (without ``./``) or the identifier."""
    by_name = _tree(make_app_result(), modules=True, exclude_modules=["src/lazy.js"])
    assert [m["name"] for m in by_name["modules"]] == ["./src/index.js", "./src/util.js"]
    assert by_name["filteredModules"] == 1

    by_identifier = _tree(make_app_result(), modules=True, exclude_modules=["/app/src/util.js"])
    assert by_identifier["filteredModules"] == 1


@mark_pipeline
def test_chunks_with_modules() -> None:
    """Chunks are ordered by id and list their modules and root modules."""
    tree = _tree(make_app_result(), chunks=True, chunk_modules=True, chunk_root_modules=True)
    first, second = tree["chunks"]

    assert first["id"] == 0
    assert first["entry"] is True
    assert first["size"] == 1536
    assert first["names"] == ["main"]
    assert [m["name"] for m in first["modules"]] == ["./src/index.js", "./src/util.js"]
    assert [m["name"] for m in first["rootModules"]] == ["./src/index.js"]
    assert first["nonRootModules"] == 1
    assert first["filteredModules"] == 0

    assert second["id"] == 1
    assert second["initial"] is False


@mark_pipeline
def test_orphans_and_nested_modules() -> None:
    """Units outside every chunk are orphans; concatenated units list their parts."""
    result = InMemoryBuildResult()
    inner = WorkUnit("/app/a.js", "./a.js", sizes={"javascript": 10})
    result.add_work_unit(
        WorkUnit("/app/concat", "./a.js + 1 modules", sizes={"javascript": 10}, modules=(inner,)),
        unit_id=5,
    )
    modules = _tree(result, modules=True, orphan_modules=True, nested_modules=True)["modules"]

    (concat,) = modules
    assert concat["orphan"] is True
    assert concat["filteredModules"] == 0
    (nested,) = concat["modules"]
    assert nested["name"] == "./a.js"
    assert nested["id"] is None
    assert "orphan" not in nested


def test_issuer_chain_stops_at_cycles() -> None:
    """A cyclic issuer relation ends the chain instead of looping."""
    result = InMemoryBuildResult()
    a = WorkUnit("/a", "./a")
    b = WorkUnit("/b", "./b")
    c = WorkUnit("/c", "./c")
    result.add_work_unit(a, issuer=b)
    result.add_work_unit(b, issuer=a)
    result.add_work_unit(c, issuer=b)

    assert issuer_chain(result, a) == [b]
    assert issuer_chain(result, c) == [a, b]


def _parent_with_children() -> InMemoryBuildResult:
    parent = InMemoryBuildResult(hash="parent", start_time=0, end_time=100)
    parent.add_child(InMemoryBuildResult(name="a", hash="ha", start_time=0, end_time=20))
    parent.add_child(InMemoryBuildResult(name="b", hash="hb", start_time=10, end_time=15))
    return parent


@mark_pipeline
def test_children_share_nested_options() -> None:
    """One nested options set applies to every child, each timed on its own session."""
    tree = _tree(_parent_with_children(), children={"timings": True})
    assert tree == {
        "children": [
            {"name": "a", "time": 20},
            {"name": "b", "time": 5},
        ]
    }


@mark_pipeline
def test_children_positional_options_fall_back_to_parent() -> None:
    """Positional options apply by index; children beyond the list use the parent's."""
    tree = _tree(_parent_with_children(), children=[{"hash": True}], timings=True)
    first, second = tree["children"]
    assert first == {"name": "a", "hash": "ha"}
    assert second == {"name": "b", "time": 5, "children": []}
    assert tree["time"] == 100


@mark_pipeline
def test_children_true_reuses_parent_options() -> None:
    """``children = true`` builds children with the parent's options."""
    tree = _tree(_parent_with_children(), children=True, hash=True)
    assert [child["hash"] for child in tree["children"]] == ["ha", "hb"]
    assert tree["hash"] == "parent"


@mark_pipeline
def test_children_empty_nested_options_still_build_children() -> None:
    """``children = {}`` turns child reports on with no further fields."""
    tree = _tree(_parent_with_children(), children={})
    assert tree == {"children": [{"name": "a"}, {"name": "b"}]}


@mark_pipeline
def test_children_empty_sequence_uses_parent_options() -> None:
    """``children = []`` builds every child with the parent's options."""
    tree = _tree(_parent_with_children(), children=[], timings=True)
    assert tree == {
        "time": 100,
        "children": [
            {"name": "a", "time": 20, "children": []},
            {"name": "b", "time": 5, "children": []},
        ],
    }


@mark_pipeline
def test_children_false_builds_no_children() -> None:
    """``children = false`` leaves the field out."""
    assert "children" not in _tree(_parent_with_children(), children=False, timings=True)


@mark_pipeline
def test_anonymous_bundle_groups() -> None:
    """Groups without ids or names do not show up in asset chunk lists."""
    result = InMemoryBuildResult()
    result.add_bundle_group(BundleGroup(id=None, files=("x.js",)))
    result.add_asset(OutputArtifact("x.js", 1))
    (asset,) = _tree(result, assets=True)["assets"]
    assert asset["chunks"] == []
    assert asset["chunkNames"] == []
    assert asset["emitted"] is False
