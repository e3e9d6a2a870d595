"""logrender renderers.

Renderers convert one value into a string. The registry picks which one
applies; the built-ins cover the fallback chain and the seeded defaults.

Available Renderers:
- DefaultRenderer: Generic fallback, never fails
- CollectionRenderer: JSON encoding of rendered mappings and sequences
- ExceptionRenderer: ``TypeName: message`` for raised errors
- LoggerRenderer: Summary of logging.Logger instances

Thread Safety:
All built-in renderers are stateless. Safe for concurrent use from
multiple threads.

"""

from logrender.renderers.collection import CollectionRenderer
from logrender.renderers.default import DefaultRenderer, dump_structure, fallback_render
from logrender.renderers.exception import ExceptionRenderer
from logrender.renderers.logger import LoggerRenderer
from logrender.renderers.protocol import (
    FunctionRenderer,
    Renderer,
    RenderOption,
    is_renderer,
    renderer,
)

__all__ = [
    "CollectionRenderer",
    "DefaultRenderer",
    "ExceptionRenderer",
    "FunctionRenderer",
    "LoggerRenderer",
    "RenderOption",
    "Renderer",
    "dump_structure",
    "fallback_render",
    "is_renderer",
    "renderer",
]
