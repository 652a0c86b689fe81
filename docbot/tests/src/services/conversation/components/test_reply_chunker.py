"""Unit tests for reply chunking."""

import math
import unittest

from docbot.src.services.conversation.components import split_reply


class TestSplitReply(unittest.TestCase):
    """Test cases for split_reply."""

    def test_short_text_is_single_chunk(self) -> None:
        """Test that text within the limit is returned unchanged."""
        self.assertEqual(split_reply("Hello there", 4096), ["Hello there"])

    def test_text_exactly_at_limit(self) -> None:
        """Test that text of exactly max_length characters is not split."""
        text = "a" * 4096
        self.assertEqual(split_reply(text, 4096), [text])

    def test_empty_text(self) -> None:
        """Test that empty text gives no chunks."""
        self.assertEqual(split_reply("", 10), [])

    def test_long_text_without_newlines_is_hard_split(self) -> None:
        """Test a 5000 character reply without line breaks."""
        text = "x" * 5000
        chunks = split_reply(text, 4096)

        self.assertEqual([len(c) for c in chunks], [4096, 904])
        self.assertEqual("".join(chunks), text)

    def test_split_at_late_newline(self) -> None:
        """Test splitting at a line break in the second half of the window."""
        text = "a" * 3000 + "\n" + "b" * 2000
        chunks = split_reply(text, 4096)

        self.assertEqual(chunks[0], "a" * 3000)
        self.assertEqual(chunks[1], "\n" + "b" * 2000)
        self.assertEqual("".join(chunks), text)

    def test_split_at_newline_in_long_reply(self) -> None:
        """Test a 9000 character reply with a line break at position 4050."""
        text = "a" * 4050 + "\n" + "b" * 4949
        chunks = split_reply(text, 4096)

        self.assertEqual(len(text), 9000)
        self.assertEqual(len(chunks[0]), 4050)
        self.assertLessEqual(len(chunks), 3)
        self.assertEqual("".join(chunks), text)

    def test_newline_that_would_add_a_chunk_is_ignored(self) -> None:
        """Test that a break past half the window is skipped when it costs a chunk."""
        text = "a" * 2100 + "\n" + "b" * 6091
        chunks = split_reply(text, 4096)

        self.assertEqual(len(text), 8192)
        self.assertEqual([len(c) for c in chunks], [4096, 4096])
        self.assertEqual("".join(chunks), text)

    def test_chunk_count_never_exceeds_ceiling(self) -> None:
        """Test the chunk count bound for line breaks at every part of the window."""
        max_length = 100
        for total in (101, 150, 200, 201, 350, 1000):
            for newline_at in range(0, min(total, 300), 7):
                text = "x" * newline_at + "\n" + "y" * (total - newline_at - 1)
                chunks = split_reply(text, max_length)
                self.assertLessEqual(len(chunks), math.ceil(total / max_length))
                self.assertEqual("".join(chunks), text)

    def test_early_newline_is_ignored(self) -> None:
        """Test that a line break in the first half of the window forces a hard cut."""
        text = "a" * 1000 + "\n" + "b" * 4000
        chunks = split_reply(text, 4096)

        self.assertEqual(len(chunks[0]), 4096)
        self.assertEqual(chunks[1], "b" * 905)
        self.assertEqual("".join(chunks), text)

    def test_newline_exactly_at_limit(self) -> None:
        """Test a line break right after max_length characters."""
        text = "a" * 10 + "\n" + "b" * 5
        chunks = split_reply(text, 10)

        self.assertEqual(chunks, ["a" * 10, "\nbbbbb"])

    def test_uses_last_newline_in_window(self) -> None:
        """Test that the last line break within the window is chosen."""
        text = "aaaaaa\nbb\ncccccccccc"
        chunks = split_reply(text, 12)

        self.assertEqual(chunks[0], "aaaaaa\nbb")
        self.assertEqual("".join(chunks), text)

    def test_all_chunks_within_limit(self) -> None:
        """Test the length bound and concatenation over mixed input."""
        lines = [("line %d " % i) * (i % 7 + 1) for i in range(400)]
        text = "\n".join(lines)
        for max_length in (1, 7, 50, 4096):
            chunks = split_reply(text, max_length)
            self.assertEqual("".join(chunks), text)
            for chunk in chunks:
                self.assertTrue(0 < len(chunk) <= max_length)

    def test_non_positive_max_length(self) -> None:
        """Test that a non-positive limit is rejected."""
        with self.assertRaises(ValueError):
            split_reply("text", 0)
        with self.assertRaises(ValueError):
            split_reply("text", -5)


if __name__ == "__main__":
    unittest.main()
