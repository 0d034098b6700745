# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from io import StringIO

import pytest

from jsondelta import prepare
from jsondelta.errors import PatchFormatError
from jsondelta.patch_format import (
    op_add, op_remove, op_replace, op_move, op_copy, op_test,
)
from jsondelta.prettyprint import (
    PrettyPrintConfig, pretty_print_value, pretty_print_dict,
    pretty_print_operation, pretty_print_patch, pretty_print_diff,
    pretty_print_json_diff,
)


class TestConfig(PrettyPrintConfig):
    __test__ = False

    def __init__(self, use_color=False):
        super(TestConfig, self).__init__(out=StringIO(), use_color=use_color)

    @property
    def output(self):
        return self.out.getvalue()


def test_pretty_print_value():
    config = TestConfig()
    pretty_print_value("two\nlines", "+  ", config)
    pretty_print_value(None, "+  ", config)
    pretty_print_value({}, "+  ", config)
    pretty_print_value("", "+  ", config)
    assert config.output == "+  two\n+  lines\n+  null\n+  {}\n+  \n"


def test_pretty_print_nested_value():
    config = TestConfig()
    pretty_print_value({"b": [1, 2], "a": {"c": "x"}}, "", config)
    assert config.output == '{"a": {"c": "x"}, "b": [1, 2]}\n'


def test_pretty_print_long_value():
    config = TestConfig()
    pretty_print_value(["x" * 50, "y" * 50], "-  ", config)
    assert config.output == '-  [\n-    "%s",\n-    "%s"\n-  ]\n' % ("x" * 50, "y" * 50)


def test_pretty_print_dict():
    config = TestConfig()
    pretty_print_dict({"b": {"c": "x", "d": {}}, "a": 1, "e": "two\nlines"}, config=config)
    assert config.output == "a: 1\nb:\n  c: x\n  d: {}\ne:\n  two\n  lines\n"


def test_pretty_print_operations():
    config = TestConfig()
    pretty_print_operation(op_add("/a", 1), config=config)
    pretty_print_operation(op_remove("/b"), config=config)
    pretty_print_operation(op_move("/c", "/d"), config=config)
    pretty_print_operation(op_copy("/c", "/e"), config=config)
    pretty_print_operation(op_test("", [1]), config=config)
    assert config.output == (
        "## added /a:\n+  1\n\n"
        "## removed /b:\n\n"
        "## moved from /c to /d:\n\n"
        "## copied from /c to /e:\n\n"
        "## tested /:\n   [1]\n\n"
    )


def test_pretty_print_unknown_operation():
    with pytest.raises(PatchFormatError):
        pretty_print_operation({"op": "merge", "path": "/a"}, config=TestConfig())


def test_pretty_print_patch_with_document():
    a = {"a": 1, "b": {"c": True}}
    config = TestConfig()
    pretty_print_patch([op_replace("/a", 2), op_remove("/b/c")], a, config)
    assert config.output == (
        "## replaced /a:\n-  1\n+  2\n\n"
        "## removed /b/c:\n-  true\n\n"
    )
    # The document is not modified while printing
    assert a == {"a": 1, "b": {"c": True}}


def test_pretty_print_patch_colored():
    config = TestConfig(use_color=True)
    pretty_print_patch([op_add("/a", 1)], config=config)
    assert "\x1b[" in config.output
    assert "added /a:" in config.output


def test_pretty_print_diff():
    d = prepare({"a": 1, "l": []}, [op_add("/l/-", "x"), op_replace("/a", 2), op_remove("/a")])
    config = TestConfig()
    pretty_print_diff(d, config)
    assert config.output == (
        "## added /l/0:\n+  x\n\n"
        "## replaced /a:\n-  1\n+  2\n\n"
        "## removed /a:\n-  2\n\n"
    )


def test_pretty_print_json_diff_header():
    config = TestConfig()
    pretty_print_json_diff("a.json", "b.json", {}, [op_add("/x", 1)], config)
    lines = config.output.splitlines()
    assert lines[0] == "jdiff a.json b.json"
    assert lines[1] == "--- a.json  (no timestamp)"
    assert lines[2] == "+++ b.json  (no timestamp)"
    assert lines[3] == "## added /x:"

    config = TestConfig()
    pretty_print_json_diff("a.json", "b.json", {}, [], config)
    assert config.output == ""
