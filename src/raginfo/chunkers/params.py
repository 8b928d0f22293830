"""Validation shared by the chunking strategies."""

from raginfo.errors import InvalidChunkParameters


def validate_parameters(target_size: int, overlap: int) -> None:
    """Reject sizes that would stall or reverse the chunking cursor.

    Raises:
        InvalidChunkParameters: if target_size < 1, overlap < 0, or
            overlap >= target_size
    """
    if target_size < 1:
        raise InvalidChunkParameters(f"target_size must be positive, got {target_size}")
    if overlap < 0:
        raise InvalidChunkParameters(f"overlap must not be negative, got {overlap}")
    if overlap >= target_size:
        raise InvalidChunkParameters(
            f"overlap ({overlap}) must be smaller than target_size ({target_size})"
        )
