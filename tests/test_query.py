"""
Tests for the query facade: conversion and computation queries, solve() callbacks, routing.
"""

import asyncio

import pytest

from app.core.config import ACCENT_COLOR
from app.core.errors import NothingToConvertError
from app.services.assembler import title_link
from app.services.query import ComputationQuery, ConversionQuery, build_query, resolve_query, solve_query
from tests.fakes import FakeImageHost, FakeWolframClient, hosted_url, make_pod, make_tree, settle, wa_image


class Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def __call__(self, message, attachments, error) -> None:
        self.calls.append((message, attachments, error))


class TestConversionQuery:
    def test_construction_fails_when_nothing_to_convert(self) -> None:
        with pytest.raises(NothingToConvertError, match="Nothing to convert"):
            ConversionQuery("integrate x^2")

    def test_custom_resolver(self) -> None:
        query = ConversionQuery("one thing", resolver=lambda text: ["a", "b"])
        assert query.text == "one thing"
        assert query.solution == ("a", "b")

    @pytest.mark.asyncio
    async def test_solve_calls_back_with_message_only(self) -> None:
        rec = Recorder()
        query = ConversionQuery("5 ft", resolver=lambda text: ["1.524 m", "60 in"])
        await query.solve(rec)
        assert rec.calls == [("5 ft = 1.524 m = 60 in", None, None)]

    @pytest.mark.asyncio
    async def test_solve_with_real_table(self) -> None:
        rec = Recorder()
        await ConversionQuery("100 f to c").solve(rec)
        assert rec.calls == [("100 f to c = 37.778 °C", None, None)]


class TestComputationQuery:
    @pytest.mark.asyncio
    async def test_zero_pods_is_error(self) -> None:
        rec = Recorder()
        query = ComputationQuery("q", False, FakeWolframClient(make_tree()), FakeImageHost())
        await query.solve(rec)
        assert rec.calls == [(None, None, True)]

    @pytest.mark.asyncio
    async def test_service_failure_is_error(self) -> None:
        rec = Recorder()
        wolfram = FakeWolframClient(None)
        await ComputationQuery("q", True, wolfram, FakeImageHost()).solve(rec)
        assert rec.calls == [(None, None, True)]
        assert wolfram.calls == ["q"]

    @pytest.mark.asyncio
    async def test_no_primary_uses_second_pod_only(self) -> None:
        tree = make_tree(
            make_pod("Input interpretation", subpods=[(wa_image("p0"), "p0")]),
            make_pod("Result", subpods=[(wa_image("p1a"), "p1a"), (wa_image("p1b"), "p1b")]),
            make_pod("Number line", subpods=[(wa_image("p2"), "p2")]),
        )
        result = await ComputationQuery("q", False, FakeWolframClient(tree), FakeImageHost()).resolve()
        assert [(a.title, a.fallback) for a in result.attachments] == [("Result", "p1a"), ("Result", "p1b")]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("first,second", [("r1", "r2"), ("r2", "r1")])
    async def test_primary_pod_with_two_subpods_completes_once_after_both_images(self, first: str, second: str) -> None:
        tree = make_tree(
            make_pod("Input", subpods=[(wa_image("in"), "in")]),
            make_pod("Roots", True, [(wa_image("r1"), "x=1"), (wa_image("r2"), "x=-1")]),
        )
        host = FakeImageHost(manual=True)
        rec = Recorder()
        task = asyncio.create_task(ComputationQuery("x^2=1", False, FakeWolframClient(tree), host).solve(rec))

        await settle()
        assert sorted(url for url, _ in host.calls) == sorted([wa_image("r1"), wa_image("r2")])

        host.gate(wa_image(first)).set()
        await settle()
        assert rec.calls == []

        host.gate(wa_image(second)).set()
        await task
        assert len(rec.calls) == 1
        message, attachments, error = rec.calls[0]
        assert message is None and error is False
        assert len(attachments) == 2
        assert all(a.color == ACCENT_COLOR for a in attachments)
        assert [a.image_url for a in attachments] == [hosted_url(wa_image("r1")), hosted_url(wa_image("r2"))]

    @pytest.mark.asyncio
    async def test_title_link_independent_of_pod_content(self) -> None:
        tree = make_tree(
            make_pod("A", True, [(None, "a")]),
            make_pod("B", subpods=[(None, "b")]),
        )
        result = await ComputationQuery("café & 1/2", True, FakeWolframClient(tree), FakeImageHost()).resolve()
        assert {a.title_link for a in result.attachments} == {title_link("café & 1/2")}
        assert title_link("café & 1/2").endswith("caf%C3%A9%20%26%201%2F2")

    @pytest.mark.asyncio
    async def test_async_callback_is_awaited(self) -> None:
        seen = []

        async def callback(message, attachments, error):
            await asyncio.sleep(0)
            seen.append(error)

        tree = make_tree(make_pod("Result", True, [(None, "4")]))
        await solve_query(ComputationQuery("2+2", False, FakeWolframClient(tree), FakeImageHost()), callback)
        assert seen == [False]


class TestBuildQuery:
    def test_conversion_first(self) -> None:
        query = build_query("5 miles", False, FakeWolframClient(), FakeImageHost())
        assert isinstance(query, ConversionQuery)

    def test_falls_back_to_computation(self) -> None:
        wolfram, host = FakeWolframClient(), FakeImageHost()
        query = build_query("  population of France  ", True, wolfram, host)
        assert isinstance(query, ComputationQuery)
        assert query.text == "population of France"
        assert query.full is True
        assert query.client is wolfram and query.image_host is host

    def test_blank_text_raises(self) -> None:
        with pytest.raises(ValueError):
            build_query("   ", False, FakeWolframClient(), FakeImageHost())


@pytest.mark.asyncio
async def test_resolve_query_rejects_unknown_kind() -> None:
    with pytest.raises(TypeError):
        await resolve_query(object())  # type: ignore[arg-type]
