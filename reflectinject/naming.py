"""
Naming

Conversion between live classes/functions and the dotted names used as
entry names (e.g. ``"app.mail.Mailer"``).
"""

import importlib
from typing import Any, Optional


def qualified_name(target: Any) -> str:
    """Return the fully qualified name of a class or function.

    Args:
        target: A class, function or method

    Returns:
        ``module.QualName``, or just the qualified name for objects
        without a module

    Example::

        >>> qualified_name(collections.OrderedDict)
        'collections.OrderedDict'
    """
    name = getattr(target, '__qualname__', None) or getattr(target, '__name__', None)
    if name is None:
        name = type(target).__qualname__
    module = getattr(target, '__module__', None)
    if not module:
        return name
    return f"{module}.{name}"


def locate(name: str) -> Optional[Any]:
    """Find the object a dotted name points to.

    The longest importable module prefix is imported, then the remaining
    parts are looked up as attributes. Names of objects defined inside
    functions (``<locals>``) can never be located.

    Args:
        name: Dotted name such as ``"package.module.Class.Nested"``

    Returns:
        The object, or None when nothing exists under that name
    """
    if not name or '<locals>' in name:
        return None

    parts = name.split('.')
    for split in range(len(parts), 0, -1):
        try:
            target = importlib.import_module('.'.join(parts[:split]))
        except ImportError:
            continue
        except ValueError:
            # Empty module name, e.g. a leading dot
            return None

        for attribute in parts[split:]:
            target = getattr(target, attribute, None)
            if target is None:
                return None
        return target

    return None
