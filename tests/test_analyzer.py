"""Tests for the per-commit diff orchestrator."""

import re

import pytest

from deadcodechange.diff.analyzer import (
    CommitNotAnalyzable,
    analyze_commit,
    is_blacklisted,
    is_excluded,
)
from deadcodechange.git.models import ChangedArtifact, Commit

LINUX_VM = r"(?:.*/)?Kconfig(?:\.[^/]*)?"
LINUX_CODE = r".*\.[hcS]"
LINUX_BUILD = r"(?:.*/)?(?:Makefile|Kbuild)(?:\.[^/]*)?"


def run(*artifacts, commit_id="abc123", consider_all_blocks=False):
    commit = Commit(
        id=commit_id,
        changed_artifacts=[ChangedArtifact(path=p, lines=list(l)) for p, l in artifacts],
    )
    return analyze_commit(
        commit, LINUX_VM, LINUX_CODE, LINUX_BUILD, consider_all_blocks=consider_all_blocks
    )


class TestExclusion:
    @pytest.mark.parametrize("path", [
        "Documentation/foo.c",
        "drivers/net/Documentation/x.c",
        "scripts/kconfig/conf.c",
        "tools/script/Makefile",
        "notes.txt",
        "drivers/README.txt",
    ])
    def test_excluded(self, path):
        assert is_excluded(path)

    @pytest.mark.parametrize("path", ["drivers/foo.c", "docs/foo.c", "Kconfig", "scriptsx/a.c"])
    def test_not_excluded(self, path):
        assert not is_excluded(path)

    def test_blacklisted_extension(self):
        assert is_blacklisted("src/mainboard/Config.lb")
        assert not is_blacklisted("src/mainboard/Config.in")

    def test_excluded_paths_are_recorded(self):
        outcome = run(
            ("Documentation/foo.c", ["+#ifdef CONFIG_A"]),
            ("drivers/foo.c", ["+int a;"]),
        )
        assert outcome.skipped_paths == ["Documentation/foo.c"]
        assert outcome.analyzed_paths == ["drivers/foo.c"]
        assert not outcome.requires_reanalysis


class TestRouting:
    def test_relevant_code_paths_accumulate(self):
        outcome = run(
            ("drivers/a.c", ["+#ifdef CONFIG_A"]),
            ("drivers/b.h", ["+#endif", "+#ifndef CONFIG_B"]),
            ("drivers/c.c", ["+int c;"]),
        )
        assert outcome.relevant_code_paths == {"drivers/a.c", "drivers/b.h"}
        assert outcome.relevant_code_changes
        assert not outcome.relevant_build_changes
        assert not outcome.relevant_model_changes

    def test_build_and_model(self):
        outcome = run(
            ("drivers/Makefile", ["+obj-$(CONFIG_A) += a.o"]),
            ("drivers/Kconfig", ["+config A"]),
        )
        assert outcome.relevant_build_changes
        assert outcome.relevant_model_changes
        assert outcome.requires_reanalysis

    def test_code_is_checked_first(self):
        outcome = run(("arch/Kconfig.h", ["+#ifdef CONFIG_X"]))
        assert outcome.relevant_code_paths == {"arch/Kconfig.h"}
        assert not outcome.relevant_model_changes

    def test_unmatched_path_is_ignored(self):
        outcome = run(("README.md", ["+#ifdef CONFIG_X"]))
        assert outcome.analyzed_paths == []
        assert outcome.skipped_paths == []
        assert not outcome.requires_reanalysis

    def test_empty_path_is_skipped(self):
        outcome = run(("", ["+#ifdef CONFIG_X"]))
        assert outcome.analyzed_paths == []

    def test_consider_all_blocks(self):
        outcome = run(("drivers/a.c", ["+#ifdef DEBUG"]), consider_all_blocks=True)
        assert outcome.relevant_code_paths == {"drivers/a.c"}

    def test_compiled_patterns(self):
        commit = Commit(id="c1", changed_artifacts=[
            ChangedArtifact(path="drivers/Kconfig", lines=["+config A"]),
        ])
        outcome = analyze_commit(
            commit, re.compile(LINUX_VM), re.compile(LINUX_CODE), re.compile(LINUX_BUILD)
        )
        assert outcome.relevant_model_changes

    def test_pattern_must_match_whole_path(self):
        commit = Commit(id="c1", changed_artifacts=[
            ChangedArtifact(path="drivers/foo.c.orig", lines=["+#ifdef CONFIG_A"]),
        ])
        outcome = analyze_commit(commit, LINUX_VM, LINUX_CODE, LINUX_BUILD)
        assert not outcome.relevant_code_changes


class TestScenarios:
    def test_blacklisted_build_file(self):
        outcome = run(("src/Makefile.lb", ["+obj-$(CONFIG_X) += x.o"]))
        assert not outcome.relevant_build_changes
        assert outcome.skipped_paths == ["src/Makefile.lb"]

    def test_build_flag_short_circuits(self):
        outcome = run(
            ("drivers/Makefile", ["+obj-$(CONFIG_A) += a.o"]),
            ("net/Makefile", ["+obj-y += b.o"]),
        )
        assert outcome.relevant_build_changes
        assert outcome.analyzed_paths == ["drivers/Makefile"]

    def test_irrelevant_build_file_does_not_block_later_one(self):
        outcome = run(
            ("net/Makefile", ["+obj-y += b.o"]),
            ("drivers/Makefile", ["+obj-$(CONFIG_A) += a.o"]),
        )
        assert outcome.relevant_build_changes
        assert outcome.analyzed_paths == ["net/Makefile", "drivers/Makefile"]

    def test_model_flag_short_circuits(self):
        outcome = run(
            ("drivers/Kconfig", ["+config A"]),
            ("net/Kconfig", ["+\thelp text"]),
        )
        assert outcome.relevant_model_changes
        assert outcome.analyzed_paths == ["drivers/Kconfig"]

    def test_empty_id_is_not_analyzable(self):
        with pytest.raises(CommitNotAnalyzable):
            run(("drivers/a.c", ["+#ifdef CONFIG_A"]), commit_id="")


class TestEvidence:
    def test_evidence_per_relevant_artifact(self):
        outcome = run(
            ("drivers/a.c", ["int a;", "+#ifdef CONFIG_A"]),
            ("drivers/Makefile", ["+obj-$(CONFIG_A) += a.o"]),
            ("drivers/b.c", ["+int b;"]),
        )
        assert [(e.path, e.file_type, e.line_index) for e in outcome.evidence] == [
            ("drivers/a.c", "code", 1),
            ("drivers/Makefile", "build", 0),
        ]
        assert outcome.evidence[0].line == "+#ifdef CONFIG_A"
