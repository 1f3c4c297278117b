from __future__ import annotations

import pytest

from term_markdown.links import LinkRegistry
from term_markdown.selection import key_to_index, select_link


@pytest.mark.parametrize("key, expected", [(str(digit), digit) for digit in range(10)])
def test_digits_select_their_index(key: str, expected: int):
    assert key_to_index(key) == expected


@pytest.mark.parametrize("key", ["", "a", "q", " ", "10", "Enter", "\x1b", "٣", "³"])
def test_other_keys_select_nothing(key: str):
    assert key_to_index(key) is None


def test_select_link():
    registry = LinkRegistry()
    registry.add("(b)")
    registry.add("(a)")

    assert select_link(registry, "0") == "(a)"
    assert select_link(registry, "1") == "(b)"
    assert select_link(registry, "2") is None
    assert select_link(registry, "x") is None


def test_select_link_on_empty_registry():
    assert select_link(LinkRegistry(), "0") is None


def test_only_first_ten_links_are_reachable():
    registry = LinkRegistry()
    for index in range(12):
        registry.add(f"({index:02d})")

    selected = {select_link(registry, str(digit)) for digit in range(10)}

    assert "(10)" not in selected
    assert "(11)" not in selected
    assert len(selected) == 10
