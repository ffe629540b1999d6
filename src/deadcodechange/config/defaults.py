"""Starter .deadcodechange.toml template."""

DEFAULT_TOML = """\
# Dead code change analysis configuration
version = "1.0"

[files]
profile = "linux"         # linux | coreboot | busybox | custom profile id
# Full-match path expressions; a non-empty value overrides the profile
# vm_files_regex = "(?:.*/)?Kconfig(?:\\\\.[^/]*)?"
# code_files_regex = ".*\\\\.[hcS]"
# build_files_regex = "(?:.*/)?(?:Makefile|Kbuild)(?:\\\\.[^/]*)?"

[analysis]
consider_all_blocks = false   # treat every preprocessor block as relevant
jobs = 1                      # concurrent analysis workers

[git]
context_lines = 3

[output]
format = "terminal"       # terminal | json
show_summary = true
show_evidence = false
"""
