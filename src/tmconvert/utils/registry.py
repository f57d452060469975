"""
Name based registration of implementation classes.

Converters register themselves on their base class under one or more names,
and callers look them up by name instead of importing a concrete class. Names
are matched case-insensitively; the name used at registration is kept for
display.
"""

from __future__ import annotations

from typing import Callable, ClassVar, Generic, TypeVar

__all__ = ["RegistryMixin"]


RegistryObjT = TypeVar("RegistryObjT")
RegisterT = TypeVar("RegisterT")


class RegistryMixin(Generic[RegistryObjT]):
    """
    Mixin giving a class hierarchy its own name to object registry.

    The registry lives on the class whose `register` is called, so every base
    class that mixes this in keeps a separate namespace.

    Example:
    ::
        class Converter(RegistryMixin):
            pass

        @Converter.register(["fold", "infinite"])
        class FoldConverter(Converter):
            pass

        assert Converter.get_registered_object("FOLD") is FoldConverter

    :cvar registry: Registered objects keyed by their registration name, or
        None before the first registration
    """

    registry: ClassVar[dict[str, RegistryObjT] | None] = None  # type: ignore[misc]

    @classmethod
    def register(
        cls, name: str | list[str] | None = None
    ) -> Callable[[RegisterT], RegisterT]:
        """
        Class decorator form of `register_decorator`.

        :param name: Name or names to register under, defaults to the
            decorated object's ``__name__``
        :return: A decorator returning the object unchanged
        """

        def _decorator(obj: RegisterT) -> RegisterT:
            return cls.register_decorator(obj, name=name)

        return _decorator

    @classmethod
    def register_decorator(
        cls, obj: RegisterT, name: str | list[str] | None = None
    ) -> RegisterT:
        """
        Add an object to the registry.

        :param obj: The object to register
        :param name: Name or names to register under, defaults to the object's
            ``__name__``
        :return: The object unchanged
        :raises ValueError: If a name is not a string or is already taken,
            compared case-insensitively
        """
        if name is None:
            names = [getattr(obj, "__name__", str(obj))]
        elif isinstance(name, str):
            names = [name]
        elif isinstance(name, list):
            names = name
        else:
            raise ValueError(
                f"{cls.__name__}.register name must be a string or a list of "
                f"strings, got {name!r}"
            )

        if cls.registry is None:
            cls.registry = {}

        for register_name in names:
            if not isinstance(register_name, str):
                raise ValueError(
                    f"{cls.__name__}.register name must be a string or a list of "
                    f"strings, got {register_name!r}"
                )
            if cls._lookup_key(register_name) is not None:
                raise ValueError(
                    f"Cannot register {obj!r} as '{register_name}' on "
                    f"{cls.__name__}: the name is already registered"
                )
            cls.registry[register_name] = obj  # type: ignore[assignment]

        return obj

    @classmethod
    def registered_objects(cls) -> tuple[RegistryObjT, ...]:
        """
        :return: Every registered object in registration order, aliases once
        :raises ValueError: If nothing has been registered yet
        """
        if cls.registry is None:
            raise ValueError(
                f"{cls.__name__}.registered_objects() must be called after "
                "registering objects with register()"
            )

        return tuple(dict.fromkeys(cls.registry.values()))

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return cls._lookup_key(name) is not None

    @classmethod
    def get_registered_object(cls, name: str) -> RegistryObjT | None:
        """
        Look up an object by name, exact match first, then case-insensitive.

        :param name: The registration name
        :return: The registered object, or None if the name is unknown
        """
        key = cls._lookup_key(name)
        if key is None:
            return None

        return cls.registry[key]  # type: ignore[index]

    @classmethod
    def _lookup_key(cls, name: str) -> str | None:
        if not cls.registry:
            return None
        if name in cls.registry:
            return name

        folded = name.lower()
        return next((key for key in cls.registry if key.lower() == folded), None)
