"""
Line-based splitting of files that exceed the chunk limit.
"""

import logging
from dataclasses import dataclass
from typing import List

from .exceptions import FileTooLargeError
from .file_info import FileInfo, split_lines
from .token_counter import TokenEstimator

logger = logging.getLogger(__name__)

SAMPLE_LINES = 100


@dataclass(frozen=True)
class SplitParameters:
    """Planning parameters derived from a sample of the file."""
    lines_per_chunk: int
    overlap_lines: int
    estimated_parts: int


class LargeFileSplitter:
    """
    Splits one oversized text file into ordered, overlapping parts.

    The number of lines per part is planned from the average token cost of
    the first lines of the file; each part's token count is then measured
    on its actual text. A part may still exceed the limit (for example a
    single very long line); it is emitted anyway with a warning.
    """

    def __init__(self, max_tokens: int, overlap_tokens: int, token_estimator: TokenEstimator):
        """
        Initialize the splitter.

        Args:
            max_tokens: Capacity of a single part
            overlap_tokens: Target overlap between consecutive parts
            token_estimator: Estimator used for sampling and measuring parts
        """
        self.max_tokens = max_tokens
        self.overlap_tokens = overlap_tokens
        self.token_estimator = token_estimator

    def split(self, file_info: FileInfo) -> List[FileInfo]:
        """
        Split a file into parts.

        Args:
            file_info: Text file whose token count exceeds the capacity

        Returns:
            Ordered list of part records (at least one)

        Raises:
            FileTooLargeError: If the file is binary
        """
        text = file_info.text
        if text is None:
            raise FileTooLargeError(file_info.path, file_info.token_count, self.max_tokens)

        lines = split_lines(text)
        total_lines = len(lines)
        if total_lines == 0:
            return [file_info]

        params = self.calculate_split_parameters(lines)
        step = params.lines_per_chunk - params.overlap_lines

        parts: List[FileInfo] = []
        start_line = 0
        part_number = 1

        while start_line < total_lines:
            end_line = min(start_line + params.lines_per_chunk, total_lines)
            part_text = "\n".join(lines[start_line:end_line])
            token_count = self.token_estimator.estimate(part_text)

            if token_count > self.max_tokens:
                logger.warning(
                    f"Part {part_number}/{params.estimated_parts} of '{file_info.relative_path}' "
                    f"has {token_count} tokens (exceeds limit of {self.max_tokens})"
                )

            parts.append(
                FileInfo.text_file(
                    path=file_info.path,
                    relative_path=f"{file_info.relative_path} [Part {part_number}/{params.estimated_parts}]",
                    text=part_text,
                    token_count=token_count,
                    encoding=file_info.encoding,
                )
            )

            if end_line >= total_lines:
                break

            start_line = max(end_line - params.overlap_lines, 0)
            part_number += 1

        logger.debug(
            f"Split '{file_info.relative_path}' into {len(parts)} parts "
            f"({params.lines_per_chunk} lines each, {params.overlap_lines} overlap, step {step})"
        )
        return parts

    def calculate_split_parameters(self, lines: List[str]) -> SplitParameters:
        """
        Plan lines per part, overlap and part count from a sample.

        Overlap is capped at half a part so every part advances by at
        least one line.
        """
        total_lines = len(lines)
        sample_size = min(total_lines, SAMPLE_LINES)

        if sample_size > 0:
            sample_tokens = self.token_estimator.estimate("\n".join(lines[:sample_size]))
            avg_tokens_per_line = max(sample_tokens / sample_size, 1.0)
        else:
            avg_tokens_per_line = 1.0

        lines_per_chunk = max(int(self.max_tokens / avg_tokens_per_line), 1)
        overlap_lines = min(int(self.overlap_tokens / avg_tokens_per_line), lines_per_chunk // 2)

        step = lines_per_chunk - overlap_lines
        if total_lines <= lines_per_chunk:
            estimated_parts = 1
        else:
            estimated_parts = 1 + -(-(total_lines - lines_per_chunk) // step)

        return SplitParameters(
            lines_per_chunk=lines_per_chunk,
            overlap_lines=overlap_lines,
            estimated_parts=estimated_parts,
        )
