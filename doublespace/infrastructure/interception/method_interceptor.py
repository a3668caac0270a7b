"""
Installs proxies over a subject's methods and restores them afterwards.

The proxy is bound with ``setattr`` directly on the subject: an instance, a
class or a module. The original attribute is remembered only when it lives
in the subject's own ``__dict__``; an inherited attribute is restored by
deleting the proxy so the lookup falls through to the class hierarchy again.
"""
import inspect
import logging
import types
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from doublespace.core.exceptions.base import OriginalMethodMissingError

logger = logging.getLogger(__name__)

NONEXISTENT_ATTRIBUTE = object()


def find_original_method(subject: Any, method_name: str) -> Optional[Callable]:
    """Return the callable that would run absent interception, or None if the subject lacks it."""
    try:
        inspect.getattr_static(subject, method_name)
    except AttributeError:
        return None
    return getattr(subject, method_name)


def _dynamic_fallback(subject: Any, method_name: str) -> Optional[Callable]:
    if isinstance(subject, types.ModuleType):
        handler = vars(subject).get("__getattr__")
        return handler(method_name) if handler is not None else None

    subject_type = type(subject)
    try:
        inspect.getattr_static(subject_type, "__getattr__")
    except AttributeError:
        return None
    return subject_type.__getattr__(subject, method_name)


def invoke_original(subject: Any, method_name: str, original: Optional[Callable],
                    args: Sequence = (), kwargs: Mapping = None) -> Any:
    kwargs = dict(kwargs or {})
    if original is not None:
        return original(*args, **kwargs)

    fallback = _dynamic_fallback(subject, method_name)
    if fallback is None:
        raise OriginalMethodMissingError(
            f"{subject!r} does not implement {method_name} and has no __getattr__ fallback"
        )
    return fallback(*args, **kwargs)


class MethodInterceptor:
    def __init__(self, block_keyword: str = "block"):
        self.block_keyword = block_keyword
        # (subject, method_name, original_attribute) in installation order
        self._stubs: List[Tuple[Any, str, Any]] = []
        self._by_key: Dict[Tuple[int, str], Tuple[Any, str, Any]] = {}

    def install(self, double) -> None:
        subject, method_name = double.subject, double.method_name
        key = (id(subject), method_name)
        if key in self._by_key:
            return

        namespace = getattr(subject, "__dict__", None)
        if namespace is not None and method_name in namespace:
            original_attribute = namespace[method_name]
        else:
            original_attribute = NONEXISTENT_ATTRIBUTE

        proxy = self._build_proxy(double)
        if isinstance(subject, type):
            setattr(subject, method_name, staticmethod(proxy))
        else:
            setattr(subject, method_name, proxy)

        stub = (subject, method_name, original_attribute)
        self._stubs.append(stub)
        self._by_key[key] = stub
        logger.debug(f"Installed proxy for {method_name} on {subject!r}")

    def _build_proxy(self, double) -> Callable:
        block_keyword = self.block_keyword

        def proxy(*args, **kwargs):
            block = kwargs.pop(block_keyword, None)
            return double.space.dispatch(double.subject, double.method_name, args, kwargs, block)

        proxy.__name__ = double.method_name
        proxy.__doubled__ = double
        return proxy

    def is_installed(self, subject: Any, method_name: str) -> bool:
        return (id(subject), method_name) in self._by_key

    def restore(self, subject: Any, method_name: str) -> None:
        stub = self._by_key.pop((id(subject), method_name), None)
        if stub is None:
            return
        self._stubs.remove(stub)
        self._perform_restore(stub)

    def restore_all(self) -> None:
        for stub in reversed(self._stubs):
            self._perform_restore(stub)
        self._stubs = []
        self._by_key = {}

    def _perform_restore(self, stub: Tuple[Any, str, Any]) -> None:
        subject, method_name, original_attribute = stub
        if original_attribute is NONEXISTENT_ATTRIBUTE:
            try:
                delattr(subject, method_name)
            except AttributeError:
                logger.warning(f"Proxy for {method_name} already removed from {subject!r}")
        else:
            setattr(subject, method_name, original_attribute)
        logger.debug(f"Restored {method_name} on {subject!r}")
