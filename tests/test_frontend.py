import unittest

import brainfly_lang
from brainfly_lang import AddData, Input, LoopBody, MovePointer, Output


class FrontendTests(unittest.TestCase):
    def test_run_of_plus_merges_into_one_node(self) -> None:
        self.assertEqual(brainfly_lang.parse("+++"), [AddData(3)])

    def test_mixed_data_run_keeps_net_delta(self) -> None:
        self.assertEqual(brainfly_lang.parse("+-+"), [AddData(1)])

    def test_mixed_pointer_run_keeps_net_offset(self) -> None:
        self.assertEqual(brainfly_lang.parse(">><<<"), [MovePointer(-1)])

    def test_net_zero_run_still_emits_a_node(self) -> None:
        self.assertEqual(brainfly_lang.parse("+-"), [AddData(0)])

    def test_pointer_and_data_runs_do_not_merge_with_each_other(self) -> None:
        self.assertEqual(
            brainfly_lang.parse(">>++<"),
            [MovePointer(2), AddData(2), MovePointer(-1)],
        )

    def test_comment_splits_a_run(self) -> None:
        self.assertEqual(brainfly_lang.parse("+ +"), [AddData(1), AddData(1)])

    def test_io_is_never_merged(self) -> None:
        self.assertEqual(
            brainfly_lang.parse("..,,"), [Output(), Output(), Input(), Input()]
        )

    def test_comments_are_ignored(self) -> None:
        self.assertEqual(brainfly_lang.parse("hello world\n"), [])

    def test_empty_loops_parse(self) -> None:
        self.assertEqual(brainfly_lang.parse("[]"), [LoopBody([])])
        self.assertEqual(brainfly_lang.parse("[[]]"), [LoopBody([LoopBody([])])])

    def test_loop_body_is_owned_by_its_loop(self) -> None:
        tree = brainfly_lang.parse("+[->+<]>.")
        self.assertEqual(
            tree,
            [
                AddData(1),
                LoopBody([AddData(-1), MovePointer(1), AddData(1), MovePointer(-1)]),
                MovePointer(1),
                Output(),
            ],
        )

    def test_unmatched_close_bracket_raises(self) -> None:
        with self.assertRaises(brainfly_lang.MalformedProgram) as ctx:
            brainfly_lang.parse("]")
        self.assertIn("']'", str(ctx.exception))

    def test_unterminated_open_bracket_raises(self) -> None:
        with self.assertRaises(brainfly_lang.MalformedProgram) as ctx:
            brainfly_lang.parse("[")
        self.assertIn("'['", str(ctx.exception))

    def test_error_reports_offset_of_the_bad_bracket(self) -> None:
        with self.assertRaises(brainfly_lang.MalformedProgram) as ctx:
            brainfly_lang.parse("+[]]")
        self.assertIn("offset 4", str(ctx.exception))
        with self.assertRaises(brainfly_lang.MalformedProgram) as ctx:
            brainfly_lang.parse("[[]")
        self.assertIn("offset 1", str(ctx.exception))

    def test_malformed_program_is_a_brainfly_error(self) -> None:
        with self.assertRaises(brainfly_lang.BrainflyError):
            brainfly_lang.compile_program("[[")


if __name__ == "__main__":
    unittest.main(verbosity=2)
