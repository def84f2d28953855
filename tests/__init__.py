"""
SAM Error Read Filter - Test Suite

Test Organization:
- test_comparator.py: Comparator symbols and semantics
- test_criterion.py: Value kinds and criterion state
- test_parser.py: Rule file parsing and its warnings
- test_engine.py: Filter evaluation cycle, mismatch policies, tallies
- test_driver.py: Observation tables and the filter runner
- test_models.py: Report models and export
- test_config.py / test_utils.py: Settings and logging
- test_cli.py: Command-line interface

Sample rule files are in tests/fixtures/rules.py.

Run tests:
    $ pdm run pytest tests/ -v
"""
