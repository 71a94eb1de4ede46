"""Repository standards checks for guardkit.

- No bare ``except`` and every handler re-raises
- No ``contextlib.suppress``
- No ``print``; modules log through ``guardkit.logging``
- No ``typing.Any``, ``cast`` or ``type: ignore``
- Guard modules raise only classified errors from ``guardkit.errors``

Run with ``python -m tools.guard``.
"""
