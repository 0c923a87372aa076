from typing import List, Optional, Sequence, Union
from pydantic import BaseModel, ConfigDict, Field
from youtube_mcp.config import settings
from youtube_mcp.models.transcript import TranscriptChunk, TranscriptSegment
from youtube_mcp.utils.logger import logger

class NoChunking(BaseModel):
    model_config = ConfigDict(frozen=True)

class MaxLength(BaseModel):
    model_config = ConfigDict(frozen=True)

    chunk_size: int = Field(gt=0)

class SilenceGap(BaseModel):
    model_config = ConfigDict(frozen=True)

    threshold_ms: int = Field(default=200, ge=0)

ChunkingPolicy = Union[NoChunking, MaxLength, SilenceGap]


def policy_from_options(
    chunk_size: Optional[int] = None,
    chunk_by_silence: bool = False,
    silence_threshold: Optional[int] = None,
) -> ChunkingPolicy:
    """Pick the chunking policy from tool options. Silence wins over length."""
    if chunk_by_silence:
        if silence_threshold is None:
            silence_threshold = settings.SILENCE_THRESHOLD_MS
        return SilenceGap(threshold_ms=silence_threshold)
    if chunk_size:
        return MaxLength(chunk_size=chunk_size)
    return NoChunking()


def _merge(run: List[TranscriptSegment]) -> TranscriptChunk:
    return TranscriptChunk(
        text="".join(f"{seg.text} " for seg in run),
        start_ms=run[0].start_ms,
        end_ms=run[-1].end_ms,
    )


def _chunk_by_length(segments: Sequence[TranscriptSegment], chunk_size: int) -> List[TranscriptChunk]:
    chunks = []
    current = []
    current_len = 0

    for seg in segments:
        # A lone oversized segment is kept whole
        if current and current_len + len(seg.text) > chunk_size:
            chunks.append(_merge(current))
            current = []
            current_len = 0

        current.append(seg)
        current_len += len(seg.text) + 1

    if current:
        chunks.append(_merge(current))
    return chunks


def _chunk_by_silence(segments: Sequence[TranscriptSegment], threshold_ms: int) -> List[TranscriptChunk]:
    chunks = []
    current = []

    for i, seg in enumerate(segments):
        current.append(seg)
        if i + 1 < len(segments) and segments[i + 1].start_ms - seg.end_ms > threshold_ms:
            chunks.append(_merge(current))
            current = []

    if current:
        chunks.append(_merge(current))
    return chunks


def chunk(segments: Sequence[TranscriptSegment], policy: ChunkingPolicy) -> List[TranscriptChunk]:
    """Merge consecutive transcript segments into chunks under ``policy``.

    Segment order is preserved and every segment lands in exactly one chunk.
    Merged chunk text is each segment's text followed by a single space.
    ``NoChunking`` returns one chunk per segment with the text untouched.
    """
    if isinstance(policy, SilenceGap):
        return _chunk_by_silence(segments, policy.threshold_ms)
    if isinstance(policy, MaxLength):
        return _chunk_by_length(segments, policy.chunk_size)
    return [TranscriptChunk(text=s.text, start_ms=s.start_ms, end_ms=s.end_ms) for s in segments]


class Chunker:
    def __init__(self, policy: Optional[ChunkingPolicy] = None):
        self.policy = policy or NoChunking()

    def chunk(self, segments: Sequence[TranscriptSegment]) -> List[TranscriptChunk]:
        chunks = chunk(segments, self.policy)
        logger.debug(f"Split {len(segments)} segments into {len(chunks)} chunks ({type(self.policy).__name__}).")
        return chunks
