"""
mbd/core/registry.py
====================
Named registry for diagnosis problem suppliers (and any other pluggable
component, e.g. prover backends).

A problem supplier is a zero-argument callable returning
(system_description, components, observations). Suppliers are
registered by name; the diagnosis engine accepts any supplier and
never enumerates the registry itself.

Pattern: Registry.register("problem1", problem1, category="problem")
         Registry.get("problem1", category="problem") → supplier
"""
from __future__ import annotations
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

PROBLEM_CATEGORY = "problem"


class Registry:
    """Generic named-component registry, grouped by category.

    Usage:
        @Registry.decorator("two_and_gates", category="problem")
        def two_and_gates():
            return sd, comp, obs

        supplier = Registry.get("two_and_gates", category="problem")
    """
    _store: Dict[str, Dict[str, Any]] = {}    # category → {name → component}

    @classmethod
    def register(
        cls,
        name:      str,
        component: Any,
        category:  str = "default",
        override:  bool = False,
    ) -> None:
        bucket = cls._store.setdefault(category, {})
        if name in bucket and not override:
            raise KeyError(
                f"'{name}' already registered in category '{category}'. "
                "Use override=True to replace."
            )
        bucket[name] = component
        logger.debug("Registered [%s] '%s'", category, name)

    @classmethod
    def unregister(cls, name: str, category: str = "default") -> None:
        cls._store.get(category, {}).pop(name, None)

    @classmethod
    def get(cls, name: str, category: str = "default") -> Any:
        try:
            return cls._store[category][name]
        except KeyError:
            available = sorted(cls._store.get(category, {}))
            raise KeyError(
                f"'{name}' not found in category '{category}'. "
                f"Available: {available}"
            )

    @classmethod
    def list_all(cls, category: Optional[str] = None) -> Dict:
        if category:
            return dict(cls._store.get(category, {}))
        return {cat: sorted(items) for cat, items in cls._store.items()}

    @classmethod
    def decorator(cls, name: str, category: str = "default"):
        """Use as decorator: @Registry.decorator('problem1', category='problem')"""
        def _register(component):
            cls.register(name, component, category=category)
            return component
        return _register
