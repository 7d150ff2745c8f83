import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from .extract import extract_text, read_pptx_slides

logger = logging.getLogger(__name__)

CHUNK_SIZE = 2048




def chunk_text(text: str, chunk_size: int = CHUNK_SIZE) -> Iterator[str]:
    """Fixed-stride chunker, no overlap. The last chunk may be shorter."""
    for start in range(0, len(text), chunk_size):
        yield text[start:start + chunk_size]




def chunk_slides(slides: Iterable[str], chunk_size: int = CHUNK_SIZE) -> Iterator[str]:
    """Chunk each slide on its own, keeping slide order."""
    for slide in slides:
        yield from chunk_text(slide, chunk_size)


class Chunks:
    """
    Lazy, restartable sequence of chunks over a piece of text.

    Pass ``slides`` for presentations: each slide is chunked separately,
    so no chunk spans two slides. Every iteration starts again from the
    first chunk, so the same instance can be walked more than once
    without recomputing extraction.
    """

    def __init__(
        self,
        text: str = "",
        slides: Optional[List[str]] = None,
        chunk_size: int = CHUNK_SIZE,
    ):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.text = text
        self.slides = slides
        self.chunk_size = chunk_size

    def __iter__(self) -> Iterator[str]:
        if self.slides is not None:
            return chunk_slides(self.slides, self.chunk_size)
        return chunk_text(self.text, self.chunk_size)

    def __len__(self) -> int:
        if self.slides is not None:
            return sum(self._count(s) for s in self.slides)
        return self._count(self.text)

    def _count(self, text: str) -> int:
        return -(-len(text) // self.chunk_size)

    def __repr__(self):
        return f"Chunks(slides={self.slides is not None}, count={len(self)})"


def chunks_for(path: Union[str, Path]) -> Chunks:
    """
    Extract a stored document and wrap it as chunks.

    Presentations keep their slide boundaries; every other format is
    chunked as one piece of text.
    """
    path = Path(path)
    if path.suffix.lower() == ".pptx":
        slides = read_pptx_slides(path.read_bytes())
        logger.info("Extracted %d slides from %s", len(slides), path.name)
        return Chunks(slides=slides)
    return Chunks(extract_text(path))
