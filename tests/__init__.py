"""
Test Suite for tezsync

Test Structure:
- fixtures/: Synthetic TzKT payloads and model builders
- unit/: Unit tests mirroring src/ package structure
- integration/: Configuration and CLI tests

Test Data:
All addresses, hashes and amounts are synthetic. No test talks to a real indexer.
"""
