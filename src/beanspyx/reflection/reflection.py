"""
This module provides the reflection facility the introspector is built on: a frozen record describing
a single member of a class, the decorator bookkeeping used to declare failure kinds, and a provider
that enumerates the public members of a Python class.
"""
from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from types import FunctionType
from typing import Any, Callable, Dict, List, Optional, Type, get_args, get_origin, get_type_hints

from pydantic import BaseModel, ConfigDict, field_validator

def get_safe_type_hints(obj) -> Dict[str, Any]:
    """
    Safe wrapper around typing.get_type_hints that never raises.
    Returns either the resolved hints or a best-effort fallback (raw __annotations__).
    """
    try:
        if inspect.isfunction(obj) or inspect.ismethod(obj):
            return get_type_hints(obj, globalns=obj.__globals__, localns={})

        return get_type_hints(obj)
    except Exception:
        # unresolved forward references stay strings
        return dict(getattr(obj, "__annotations__", {}))

def is_list_type(typ) -> bool:
    """
    Returns True if the given type hint represents a list-like container.
    Handles typing.List, list, and parameterized generics like list[int].
    """
    if typ is None:
        return False

    origin = get_origin(typ) or typ
    return origin in (list, List)

def get_list_element_type(typ) -> Any:
    """
    Returns the element type if `typ` is a list-like type.
    Examples:
        list[int]        -> int
        List[str]        -> str
        list             -> Any
        not a list       -> None
    """
    if typ in (list, List):
        return Any

    origin = get_origin(typ)
    if origin in (list, List):
        args = get_args(typ)
        return args[0] if args else Any
    return None

def simple_name(typ) -> str:
    """
    return the unqualified name of a type
    """
    if typ is None:
        return "None"

    return getattr(typ, "__name__", None) or str(typ)

def type_name(typ) -> str:
    """
    return a canonical, module qualified name of a type, used to compare parameter signatures
    """
    if isinstance(typ, type):
        return f"{typ.__module__}.{typ.__qualname__}"

    return repr(typ)

def is_subclass(a, b) -> bool:
    """
    issubclass that tolerates generic aliases and other non class hints
    """
    if a is b:
        return True
    if a is None or b is None:
        return False

    a = get_origin(a) or a
    b = get_origin(b) or b
    if isinstance(a, type) and isinstance(b, type):
        return issubclass(a, b)

    return a == b

def is_assignable(target, source) -> bool:
    """
    Return True if a value of type `source` may be stored where `target` is expected.
    """
    if target is source or target == source:
        return True
    if target is object or target is Any:
        return True
    if source is None or target is None:
        return False

    if get_origin(target) is not None and get_args(target):
        # parameterized targets require identical arguments
        return get_origin(source) is not None and is_subclass(source, target) and get_args(source) == get_args(target)

    return is_subclass(source, target)

class DecoratorDescriptor:
    """
    A DecoratorDescriptor covers the decorator - a callable - and the passed arguments
    """
    __slots__ = [
        "decorator",
        "args"
    ]

    def __init__(self, decorator: Callable, *args):
        self.decorator = decorator
        self.args = args

    def __str__(self):
        return f"@{self.decorator.__name__}({', '.join(map(simple_name, self.args))})"

class Decorators:
    """
    Utility class that caches decorators ( Python does not have a feature for this )
    """
    @classmethod
    def add(cls, func_or_class, decorator: Callable, *args):
        """
        Remember the decorator
        Args:
            func_or_class: a function or class
            decorator: the decorator
            *args: any arguments supplied to the decorator
        """
        current = func_or_class.__dict__.get('__decorators__')
        if current is None:
            setattr(func_or_class, '__decorators__', [DecoratorDescriptor(decorator, *args)])
        else:
            current.append(DecoratorDescriptor(decorator, *args))

    @classmethod
    def has_decorator(cls, func_or_class, callable: Callable) -> bool:
        return any(decorator.decorator is callable for decorator in Decorators.get(func_or_class))

    @classmethod
    def get_all(cls, func_or_class, callable: Callable) -> list[DecoratorDescriptor]:
        return [decorator for decorator in Decorators.get(func_or_class) if decorator.decorator is callable]

    @classmethod
    def get(cls, func_or_class) -> list[DecoratorDescriptor]:
        """
        return the list of decorators associated with the given function or class
        Args:
            func_or_class: the function or class

        Returns:
            list[DecoratorDescriptor]: the list
        """
        if inspect.ismethod(func_or_class) or isinstance(func_or_class, (staticmethod, classmethod)):
            func_or_class = func_or_class.__func__

        return getattr(func_or_class, "__dict__", {}).get('__decorators__', [])

def raises(*exception_types: Type[BaseException]):
    """
    Declares the failure kinds a method may raise. The introspector uses them to detect
    vetoable setters and unicast listener registrations.
    """
    def decorator(func):
        Decorators.add(func.__func__ if isinstance(func, (staticmethod, classmethod)) else func, raises, *exception_types)

        return func

    return decorator

def declared_exceptions(func) -> frozenset:
    """
    return all failure kinds declared with @raises
    """
    result = set()
    for decorator in Decorators.get_all(func, raises):
        result.update(decorator.args)

    return frozenset(result)

class MemberMetadata(BaseModel):
    """
    Read-only description of a single callable member as reported by a ReflectionProvider.
    A `return_type` of None means the member produces no result.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    declaring_type: Any
    param_types: tuple[Any, ...] = ()
    return_type: Any = None
    exception_types: frozenset[Any] = frozenset()
    static: bool = False
    function: Any = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not value:
            raise ValueError("member name must not be empty")

        return value

    @field_validator("return_type")
    @classmethod
    def _normalize_return(cls, value):
        return None if value is type(None) else value

    # public

    def get_name(self) -> str:
        return self.name

    def param_count(self) -> int:
        return len(self.param_types)

    def declares(self, exception_type: Type[BaseException]) -> bool:
        """
        return True if the member declares the failure kind or a subclass of it
        """
        return any(is_subclass(declared, exception_type) for declared in self.exception_types)

    def __str__(self):
        params = ", ".join(simple_name(param) for param in self.param_types)
        return f"{simple_name(self.declaring_type)}.{self.name}({params}) -> {simple_name(self.return_type)}"

class ReflectionProvider(ABC):
    """
    Source of member metadata. Implementations must be stable: the same class always yields the same members.
    """
    @abstractmethod
    def list_public_members(self, cls: Type) -> list[MemberMetadata]:
        pass

    @abstractmethod
    def get_superclass(self, cls: Type) -> Optional[Type]:
        pass

class PythonReflectionProvider(ReflectionProvider):
    """
    Reflects plain Python classes. Members are the public functions, static methods and class methods
    declared by the class itself, plus those contributed by secondary bases that are not part of the
    primary base chain.

    Members are described by their annotations: a parameter without annotation is typed `object`,
    a missing return annotation counts as "no result", just like `-> None`. Unannotated getters are
    therefore not recognized as property accessors, while unannotated setters still are.
    """
    # implement

    def get_superclass(self, cls: Type) -> Optional[Type]:
        bases = getattr(cls, "__bases__", ())
        if not bases or bases[0] is object:
            return None

        return bases[0]

    def list_public_members(self, cls: Type) -> list[MemberMetadata]:
        superclass = self.get_superclass(cls)
        inherited = set(superclass.__mro__) if superclass is not None else {object}

        result = []
        for owner in cls.__mro__:
            if owner in inherited:
                continue

            for name, attr in owner.__dict__.items():
                if name.startswith("_") or self._resolve_owner(cls, name) is not owner:
                    continue

                member = self._create_member(owner, name, attr)
                if member is not None:
                    result.append(member)

        return result

    # internal

    def _resolve_owner(self, cls: Type, name: str) -> Optional[Type]:
        return next((klass for klass in cls.__mro__ if name in klass.__dict__), None)

    def _create_member(self, owner: Type, name: str, attr) -> Optional[MemberMetadata]:
        if isinstance(attr, FunctionType):
            func, static, skip = attr, False, "self"
        elif isinstance(attr, staticmethod):
            func, static, skip = attr.__func__, True, None
        elif isinstance(attr, classmethod):
            func, static, skip = attr.__func__, True, "cls"
        else:
            return None

        type_hints = get_safe_type_hints(func)
        try:
            sig = inspect.signature(func)
        except (TypeError, ValueError):
            return None

        param_types = []
        for param_name, param in sig.parameters.items():
            if param_name == skip or param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue

            param_types.append(type_hints.get(param_name, object))

        return MemberMetadata(
            name=name,
            declaring_type=owner,
            param_types=tuple(param_types),
            return_type=type_hints.get("return", None),
            exception_types=declared_exceptions(func),
            static=static,
            function=func
        )
