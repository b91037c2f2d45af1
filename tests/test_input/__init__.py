# tests/test_input/__init__.py
