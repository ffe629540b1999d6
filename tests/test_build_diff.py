"""Tests for the Kbuild/Makefile relevance classifier."""

import pytest

from deadcodechange.diff import build
from deadcodechange.diff.artifact import ArtifactDiff
from deadcodechange.diff.blocks import Directive
from deadcodechange.diff.kinds import FileKind


def verdict(lines):
    return ArtifactDiff.create(FileKind.build(), lines).relevant


class TestDirectives:
    @pytest.mark.parametrize("text,expected", [
        ("ifeq ($(ARCH),x86)", Directive.OPEN),
        ("ifneq ($(CONFIG_X),y)", Directive.OPEN),
        ("ifdef CONFIG_X", Directive.OPEN),
        ("  ifndef CONFIG_X", Directive.OPEN),
        ("else", Directive.ELSE),
        ("else ifeq ($(CONFIG_Y),y)", Directive.BRANCH),
        ("endif", Directive.CLOSE),
        ("obj-y += a.o", None),
        ("ifeqx", None),
    ])
    def test_directive(self, text, expected):
        assert build.directive(text) == expected


class TestConfigReferences:
    @pytest.mark.parametrize("text", [
        "obj-$(CONFIG_FOO) += foo.o",
        "ccflags-${CONFIG_DEBUG} += -DDEBUG",
        "ifdef CONFIG_X",
        "ifeq ($(ARCH),x86),CONFIG_X",
    ])
    def test_detected(self, text):
        assert build.references_config(text)

    @pytest.mark.parametrize("text", ["obj-y += foo.o", "MY_CONFIG_X := y"])
    def test_not_detected(self, text):
        assert not build.references_config(text)


class TestRelevance:
    def test_config_gated_object(self):
        assert verdict(["obj-y += core.o", "+obj-$(CONFIG_BAZ) += baz.o"])

    def test_plain_object(self):
        assert not verdict(["+obj-y += foo.o"])

    def test_reference_on_statement_continuation(self):
        assert verdict(["+obj-y += a.o \\", "+\tb.o $(CONFIG_Y_OBJS)"])

    def test_config_conditional(self):
        assert verdict(["+ifdef CONFIG_X", "obj-y += a.o", "+endif"])

    def test_plain_conditional(self):
        assert not verdict(["+ifeq ($(ARCH),x86)", "+endif"])

    def test_endif_of_config_conditional(self):
        assert verdict(["ifdef CONFIG_X", "obj-y += a.o", "+endif"])

    def test_else_ifeq_with_config(self):
        assert verdict(["ifeq ($(ARCH),arm)", "+else ifeq ($(CONFIG_X),y)", "endif"])

    def test_else_of_config_conditional(self):
        assert verdict(["ifneq ($(CONFIG_X),)", "A := 1", "+else", "A := 2", "endif"])

    def test_changed_line_inside_plain_conditional(self):
        assert not verdict(["ifeq ($(ARCH),x86)", "+obj-y += x86.o", "endif"])

    def test_commented_conditional(self):
        assert not verdict(["+# ifdef CONFIG_X"])

    def test_comment_continued_onto_conditional(self):
        assert not verdict(["+# comment \\", "+ifdef CONFIG_X"])
