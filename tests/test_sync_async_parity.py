"""Sync/Async API parity tests.

Validates that the blocking and async clients expose the same methods with
matching signatures.
"""

import inspect
from collections.abc import Callable
from typing import Any

import pytest

from vercel_blob import AsyncBlobClient, BlobClient


def get_param_names(func: Callable) -> list[str]:
    """Extract parameter names from a function signature."""
    sig = inspect.signature(func)
    return [
        name
        for name, param in sig.parameters.items()
        if param.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]


def get_param_defaults(func: Callable) -> dict[str, Any]:
    """Extract parameter defaults from a function signature."""
    sig = inspect.signature(func)
    return {
        name: param.default
        for name, param in sig.parameters.items()
        if param.default is not inspect.Parameter.empty
    }


def compare_signatures(sync_func: Callable, async_func: Callable) -> list[str]:
    """Compare signatures of sync and async functions.

    Returns a list of differences (empty if signatures match).
    """
    differences = []

    sync_params = get_param_names(sync_func)
    async_params = get_param_names(async_func)

    if sync_params != async_params:
        differences.append(f"Parameter names differ: sync={sync_params}, async={async_params}")

    sync_defaults = get_param_defaults(sync_func)
    async_defaults = get_param_defaults(async_func)

    # Check that defaults match for common parameters
    for name in set(sync_defaults.keys()) & set(async_defaults.keys()):
        if sync_defaults[name] != async_defaults[name]:
            differences.append(
                f"Default for '{name}' differs: "
                f"sync={sync_defaults[name]}, async={async_defaults[name]}"
            )

    return differences


OPERATIONS = ["list_objects", "iter_objects", "put", "head", "delete", "copy", "download"]


class TestBlobClientParity:
    """Test BlobClient/AsyncBlobClient signature parity."""

    @pytest.mark.parametrize("name", OPERATIONS)
    def test_operation_signatures_match(self, name):
        differences = compare_signatures(getattr(BlobClient, name), getattr(AsyncBlobClient, name))
        assert not differences, f"Signature differences: {differences}"

    @pytest.mark.parametrize("name", [n for n in OPERATIONS if n != "iter_objects"])
    def test_async_operations_are_coroutines(self, name):
        assert inspect.iscoroutinefunction(getattr(AsyncBlobClient, name))
        assert not inspect.iscoroutinefunction(getattr(BlobClient, name))

    def test_iter_objects_kinds(self):
        assert inspect.isgeneratorfunction(BlobClient.iter_objects)
        assert inspect.isasyncgenfunction(AsyncBlobClient.iter_objects)

    def test_constructor_signatures_match(self):
        differences = compare_signatures(BlobClient.__init__, AsyncBlobClient.__init__)
        assert not differences, f"Signature differences: {differences}"

    def test_close_methods(self):
        assert callable(BlobClient.close)
        assert inspect.iscoroutinefunction(AsyncBlobClient.aclose)
