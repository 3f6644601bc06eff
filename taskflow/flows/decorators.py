"""Decorators for flow creation.

``@flow`` registers a Flow subclass by name and records its single
``@pipeline`` method; ``@pipeline`` declares the method's input and
output models.
"""

import functools
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, Optional, TypeVar, Union

from pydantic import BaseModel

from .base import Flow
from .registry import flow_registry

F = TypeVar("F", bound=Callable[..., Any])
C = TypeVar("C", bound=type)

logger = logging.getLogger(__name__)


def flow(cls: Optional[C] = None, *, name: Optional[str] = None, description: str) -> Union[Callable[[C], C], C]:
    """
    Decorator to mark a Flow subclass as a flow.

    Args:
        cls: The class to decorate
        name: Optional custom name for the flow (defaults to the class name)
        description: Description of the flow's purpose (required)

    Returns:
        The decorated flow class

    Raises:
        TypeError: If the class is not a Flow subclass
        ValueError: If the class does not define exactly one pipeline method
    """

    def wrap(cls: C) -> C:
        if not issubclass(cls, Flow):
            raise TypeError(f"@flow can only decorate Flow subclasses, got {cls.__name__}")
        flow_name = name or cls.__name__

        # Only the class's own methods count, not inherited ones
        pipeline_methods = [
            attr_name
            for attr_name, attr_value in cls.__dict__.items()
            if getattr(attr_value, "__pipeline__", False)
        ]
        if len(pipeline_methods) == 0:
            raise ValueError(f"Flow class '{flow_name}' must define exactly one pipeline method using @pipeline decorator")
        if len(pipeline_methods) > 1:
            raise ValueError(
                f"Flow class '{flow_name}' has multiple pipeline methods: {', '.join(pipeline_methods)}. Only one is allowed."
            )

        cls.name = flow_name
        cls.description = description
        cls.__pipeline_method__ = pipeline_methods[0]

        flow_registry.register_flow(flow_name, cls)
        return cls

    if cls is None:
        return wrap
    return wrap(cls)


def pipeline(func: Optional[F] = None, **pipeline_kwargs: Any) -> Callable[..., Any]:
    """Mark a method as a flow pipeline.

    Args:
        func: The method to decorate
        **pipeline_kwargs: ``input_model`` and ``output_model``, both
            Pydantic BaseModel subclasses

    Raises:
        ValueError: If input_model or output_model is not a Pydantic BaseModel subclass.
    """
    input_model = pipeline_kwargs.get("input_model")
    output_model = pipeline_kwargs.get("output_model")

    if input_model is not None and not (isinstance(input_model, type) and issubclass(input_model, BaseModel)):
        raise ValueError(f"Pipeline input_model must be a Pydantic BaseModel subclass, got {input_model}")
    if output_model is not None and not (isinstance(output_model, type) and issubclass(output_model, BaseModel)):
        raise ValueError(f"Pipeline output_model must be a Pydantic BaseModel subclass, got {output_model}")

    def decorator(method: F) -> F:
        @functools.wraps(method)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            start_time = datetime.now()
            try:
                return await method(*args, **kwargs)
            finally:
                execution_time = datetime.now() - start_time
                if args:
                    flow_class = args[0].__class__.__name__
                    logger.debug(f"Pipeline execution: {flow_class}.{method.__name__} ({execution_time.total_seconds():.3f}s)")

        wrapper.__pipeline__ = True  # type: ignore[attr-defined]
        wrapper.__input_model__ = input_model  # type: ignore[attr-defined]
        wrapper.__output_model__ = output_model  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    if func is None:
        return decorator
    return decorator(func)
