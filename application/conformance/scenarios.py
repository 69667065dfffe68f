"""The query API scenarios, in the order they are run."""
from __future__ import annotations

from application.conformance.models import ScenarioBody, ScenarioContext
from application.conformance.outcome import Failure, FaultKind, attempt
from application.conformance.registry import ScenarioRegistry
from domain.entities import MatchSet, Query, RelevanceSet

ONE_DOC = "apitest_onedoc.txt"
SIMPLE_DATA = "apitest_simpledata.txt"
SIMPLE_DATA_2 = "apitest_simpledata2.txt"

DEFAULT_MAX_ITEMS = 10


def trivial(ctx: ScenarioContext) -> bool:
    return True


def always_fail(ctx: ScenarioContext) -> bool:
    """Framework self-check; not part of the default registry."""
    return False


def zero_docid_inmemory(ctx: ScenarioContext) -> bool:
    with ctx.open_session(ONE_DOC) as session:
        session.bind(Query("word"))
        mset = session.execute(0, DEFAULT_MAX_ITEMS)

    if len(mset.items) != 1 or mset.items[0].document_id == 0:
        ctx.note("A query on an inmemory database returned a zero docid")
        return False
    return True


def simple_query_mset(ctx: ScenarioContext, query: Query, max_items: int = DEFAULT_MAX_ITEMS) -> MatchSet:
    with ctx.open_session(SIMPLE_DATA) as session:
        session.bind(query)
        return session.execute(0, max_items)


def simple_query1(ctx: ScenarioContext) -> bool:
    mset = simple_query_mset(ctx, Query("word"))
    if len(mset.items) != 2:
        ctx.note(f"The size of the mset was {len(mset.items)}, expected 2.")
        return False
    return True


def simple_query2(ctx: ScenarioContext) -> bool:
    mset = simple_query_mset(ctx, Query("word"))
    if mset.document_ids != [2, 4]:
        ctx.note(f"Got docids: {mset.document_ids}, expected 2 and 4.")
        return False
    return True


def simple_query3(ctx: ScenarioContext) -> bool:
    # "thi" rather than "this": the index holds stemmed terms.
    mset = simple_query_mset(ctx, Query("thi"))
    if len(mset.items) != 6:
        ctx.note(f"Got {len(mset.items)} documents, expected 6. Docids matched: {mset.document_ids}.")
        return False
    return True


def multidb1(ctx: ScenarioContext) -> bool:
    query = Query("word")
    with ctx.open_session(SIMPLE_DATA, SIMPLE_DATA_2) as together:
        together.bind(query)
        mset1 = together.execute(0, DEFAULT_MAX_ITEMS)

    with ctx.open_session(SIMPLE_DATA) as separately:
        separately.open("inmemory", [ctx.fixture(SIMPLE_DATA_2)])
        separately.bind(query)
        mset2 = separately.execute(0, DEFAULT_MAX_ITEMS)

    if len(mset1.items) != len(mset2.items):
        ctx.note(f"Match sets are of different size: {len(mset1.items)} vs. {len(mset2.items)}")
        return False
    return True


def change_query1(ctx: ScenarioContext) -> bool:
    with ctx.open_session(SIMPLE_DATA) as session:
        query = Query("this")
        session.bind(query)
        mset1 = session.execute(0, DEFAULT_MAX_ITEMS)

        query = Query("foo")  # noqa: F841 - the session must not see this
        mset2 = session.execute(0, DEFAULT_MAX_ITEMS)

    if mset1 != mset2:
        ctx.note(f"Match sets differ after reassigning the query: {mset1.document_ids} vs. {mset2.document_ids}")
        return False
    return True


def null_query1(ctx: ScenarioContext) -> bool:
    outcome = attempt(simple_query_mset, ctx, Query())
    if isinstance(outcome, Failure) and outcome.kind is FaultKind.COLLABORATOR:
        return True
    ctx.note(f"Expected a retrieval error for an empty query, got {outcome!r}")
    return False


def mset_max_items1(ctx: ScenarioContext) -> bool:
    mset = simple_query_mset(ctx, Query("thi"), max_items=1)
    if len(mset.items) != 1:
        ctx.note(f"Asked for 1 item, got {len(mset.items)}.")
        return False
    return True


def expand_max_items1(ctx: ScenarioContext) -> bool:
    with ctx.open_session(SIMPLE_DATA) as session:
        session.bind(Query("thi"))
        mset = session.execute(0, DEFAULT_MAX_ITEMS)

        relevant = RelevanceSet()
        relevant.add_document(mset.items[0].document_id)
        relevant.add_document(mset.items[1].document_id)
        eset = session.expand(1, relevant)

    if len(eset.items) != 1:
        ctx.note(f"Asked for 1 expansion term, got {len(eset.items)}: {eset.terms}")
        return False
    return True


DEFAULT_SCENARIOS: tuple[tuple[str, ScenarioBody], ...] = (
    ("trivial", trivial),
    ("zerodocid_inmemory", zero_docid_inmemory),
    ("simplequery1", simple_query1),
    ("simplequery2", simple_query2),
    ("simplequery3", simple_query3),
    ("multidb1", multidb1),
    ("changequery1", change_query1),
    ("nullquery1", null_query1),
    ("msetmaxitems1", mset_max_items1),
    ("expandmaxitems1", expand_max_items1),
)


def build_default_registry() -> ScenarioRegistry:
    return ScenarioRegistry(DEFAULT_SCENARIOS)


__all__ = [
    "DEFAULT_SCENARIOS",
    "build_default_registry",
    "simple_query_mset",
    "trivial",
    "always_fail",
]
