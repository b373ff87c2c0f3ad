from __future__ import annotations

from relcfg.core.structured import (
    as_obj_list,
    as_str_dict,
    get_bool,
    get_int,
    get_list,
    get_str,
    get_table,
    is_str_dict,
    is_str_list,
)


def test_str_dict_guards() -> None:
    assert is_str_dict({"a": 1})
    assert not is_str_dict({1: "a"})
    assert not is_str_dict(["a"])
    assert as_str_dict("x") is None


def test_list_guards() -> None:
    assert is_str_list(["a", "b"])
    assert is_str_list([])
    assert not is_str_list(["a", 1])
    assert not is_str_list("a")
    assert as_obj_list((1, 2)) is None


def test_getters() -> None:
    table: dict[str, object] = {
        "name": "  main ",
        "blank": "   ",
        "count": 3,
        "flag": True,
        "nested": {"k": "v"},
        "items": [1, "two"],
    }
    assert get_str(table, "name") == "main"
    assert get_str(table, "blank") is None
    assert get_str(table, "count") is None
    assert get_int(table, "count") == 3
    assert get_int(table, "flag") is None
    assert get_bool(table, "flag") is True
    assert get_bool(table, "count") is None
    assert get_table(table, "nested") == {"k": "v"}
    assert get_table(table, "items") is None
    assert get_list(table, "items") == [1, "two"]
    assert get_list(table, "missing") is None
