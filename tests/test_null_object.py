"""NullObject behaves as an empty, chainable stand-in."""

from __future__ import annotations

import copy

import pytest

from thecity.null_object import NULL, NullObject


def test_singleton() -> None:
    assert NullObject() is NULL
    assert NullObject.instance() is NULL
    assert copy.copy(NULL) is NULL
    assert copy.deepcopy(NULL) is NULL


def test_attribute_reads_return_self() -> None:
    assert NULL.name is NULL
    assert NULL.place.country.name is NULL
    assert NULL.anything() is NULL


def test_predicates_return_false() -> None:
    assert NULL.has_name() is False
    assert NULL.has_profile_pic_url() is False


def test_reads_as_empty() -> None:
    assert not NULL
    assert NULL == None  # noqa: E711
    assert NULL['name'] is None
    assert len(NULL) == 0
    assert list(NULL) == []
    assert NULL.attrs == {}
    assert NULL.to_dict() == {}


def test_private_names_raise() -> None:
    with pytest.raises(AttributeError):
        NULL._memo
