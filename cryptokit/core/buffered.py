"""
Streaming block accumulator shared by every hasher and cipher.

Input of arbitrary length is buffered and released in whole blocks. Each
ready block is handed to ``_do_process_block`` (supplied by the concrete
algorithm) and transformed in place; the processed words are removed from
the buffer and returned.
"""

import copy
from typing import List

from .encoding import to_word_array
from .words import WordArray


class BufferedBlockAlgorithm:
    """
    Abstract buffered block algorithm.

    Subclasses set ``block_size`` (in 32-bit words) and implement
    ``_do_process_block``. ``_min_buffer_size`` is the number of whole blocks
    held back on every non-flushing ``_process`` call.
    """

    block_size = 1
    _min_buffer_size = 0

    def reset(self) -> None:
        """Discard any buffered data."""
        self._data = WordArray()
        self._n_data_bytes = 0

    def _append(self, data) -> None:
        """
        Add data to the buffer.

        Args:
            data: str (UTF-8 encoded), bytes or WordArray
        """
        data = to_word_array(data)
        self._data.concat(data)
        self._n_data_bytes += data.sig_bytes

    def _process(self, do_flush: bool = False) -> WordArray:
        """
        Process every ready block.

        Args:
            do_flush: Also process the trailing partial block

        Returns:
            The processed data
        """
        data = self._data
        data_words = data.words
        data_sig_bytes = data.sig_bytes
        block_size = self.block_size
        block_size_bytes = block_size * 4

        if do_flush:
            n_blocks_ready = -(-data_sig_bytes // block_size_bytes)
        else:
            n_blocks_ready = max(data_sig_bytes // block_size_bytes - self._min_buffer_size, 0)

        n_words_ready = n_blocks_ready * block_size
        n_bytes_ready = min(n_words_ready * 4, data_sig_bytes)

        processed_words: List[int] = []
        if n_words_ready:
            data.zero_extend(n_words_ready)
            for offset in range(0, n_words_ready, block_size):
                self._do_process_block(data_words, offset)
            processed_words = data_words[:n_words_ready]
            del data_words[:n_words_ready]
            data.sig_bytes -= n_bytes_ready

        return WordArray(processed_words, n_bytes_ready)

    def _do_process_block(self, words: List[int], offset: int) -> None:
        raise NotImplementedError

    def clone(self):
        """Return an independent copy, including buffered data and registers."""
        return copy.deepcopy(self)
