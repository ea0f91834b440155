"""Request body preparation: nested JSON fields and file attachments.

The Bot API accepts ``multipart/form-data`` bodies where every top-level
field is either a plain value or an uploaded file. Structured parameters
(keyboards, media groups, ...) are sent as JSON strings, and files nested
inside them are referenced with ``attach://<name>`` and uploaded as extra
top-level parts.

:func:`prepare_body` performs that conversion::

    prepare_body({"chat_id": 1, "media": [{"type": "photo", "media": photo}]})
    # -> {"chat_id": 1,
    #     "media": '[{"type":"photo","media":"attach://_file0"}]',
    #     "_file0": photo}

Top-level attachments are left in place; the transport uploads them as is.
"""

from __future__ import annotations

import io
import json
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Mapping, Optional, Union

ATTACH_PREFIX = "attach://"
FILE_REF_PREFIX = "_file"


@dataclass(frozen=True)
class InputFile:
    """A file to upload, with an explicit filename and MIME type.

    Open binary streams (``open(path, "rb")``, :class:`io.BytesIO`) are
    accepted as attachments directly; use :class:`InputFile` when the
    filename or content type must be controlled.

    Attributes:
        filename: Name reported in the multipart part.
        content: Raw bytes or a readable binary stream. Left out of
            ``repr`` so debug traces never dump file contents.
        mime_type: Optional content type; sent as
            ``application/octet-stream`` when ``None``.
    """

    filename: str
    content: Union[bytes, IO[bytes]] = field(repr=False)
    mime_type: Optional[str] = None

    @classmethod
    def from_path(cls, path: Union[str, Path], mime_type: Optional[str] = None) -> InputFile:
        """Read *path* from disk into an :class:`InputFile`."""
        path = Path(path)
        if mime_type is None:
            mime_type, _ = mimetypes.guess_type(path.name)
        return cls(filename=path.name, content=path.read_bytes(), mime_type=mime_type)

    def as_httpx_file(self) -> tuple[str, Union[bytes, IO[bytes]], str]:
        """Return the ``(filename, content, content_type)`` tuple httpx expects."""
        return (self.filename, self.content, self.mime_type or "application/octet-stream")


def is_attachment(value: Any) -> bool:
    """Return ``True`` if *value* must be sent as a file part.

    Text streams (:class:`io.StringIO`, files opened in text mode) are not
    attachments; multipart parts carry bytes only.
    """
    if isinstance(value, io.TextIOBase):
        return False
    return isinstance(value, (InputFile, io.IOBase))


def extract_files(node: Any, files: dict[str, Any]) -> Any:
    """Replace attachments nested in *node* with ``attach://`` references.

    Walks mappings and sequences depth first. Every attachment found is
    stored in *files* under ``_file<N>``, where ``N`` is the size of
    *files* at that moment, and its position in the returned structure
    holds ``"attach://_file<N>"``. The same object occurring twice gets
    two references.

    Args:
        node: A scalar, attachment, mapping, or list/tuple.
        files: Accumulator shared by the whole walk. Mutated in place.

    Returns:
        A new structure with the same shape as *node*. Scalars are returned
        unchanged.
    """
    if is_attachment(node):
        ref = f"{FILE_REF_PREFIX}{len(files)}"
        files[ref] = node
        return f"{ATTACH_PREFIX}{ref}"
    if isinstance(node, Mapping):
        return {key: extract_files(value, files) for key, value in node.items()}
    if isinstance(node, (list, tuple)):
        return [extract_files(item, files) for item in node]
    return node


def _is_container(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def prepare_body(body: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Encode nested fields of *body* as JSON and lift nested files to the top.

    Each top-level value that is a mapping or a list is walked with
    :func:`extract_files` and replaced by its compact JSON encoding (empty
    containers become ``"{}"`` / ``"[]"``). Other values, including
    top-level attachments, pass through unchanged. Extracted attachments
    are then added as top-level fields named by their reference.

    One attachment table is used for the whole body, so references never
    collide across fields.

    Args:
        body: Request parameters. ``None`` is treated as an empty body.
            The mapping is not modified.

    Returns:
        A new dict safe to hand to the transport.
    """
    files: dict[str, Any] = {}
    prepared: dict[str, Any] = {}
    for key, value in (body or {}).items():
        if _is_container(value):
            value = json.dumps(
                extract_files(value, files),
                ensure_ascii=False,
                separators=(",", ":"),
            )
        prepared[key] = value
    prepared.update(files)
    return prepared
