import io
import unittest

import brainfly_lang
from brainfly_lang import RuntimeConfig
from brainfly_lang.codegen import generate_source, nesting_depth, specialize

from tests.canon_runner import reference_run


def _chain(source):
    return brainfly_lang.lower(brainfly_lang.parse(source))


def _call(fn, stdin=b"", memory_size=64):
    memory = bytearray(memory_size)
    out = io.BytesIO()
    address = fn(0, memory, io.BytesIO(stdin), out)
    return address, out.getvalue(), memory


class SourceShapeTests(unittest.TestCase):
    def test_operands_are_literals(self) -> None:
        src = generate_source(_chain("+++>>-"))
        self.assertIn("memory[address] = (memory[address] + 3) & 255", src)
        self.assertIn("address += 2", src)
        self.assertIn("memory[address] = (memory[address] + 255) & 255", src)

    def test_loops_become_while_statements(self) -> None:
        src = generate_source(_chain("[-]"))
        self.assertIn("while memory[address]:", src)
        self.assertNotIn("_loop_", src)

    def test_zero_operands_emit_nothing(self) -> None:
        src = generate_source(_chain("+-><"))
        self.assertNotIn("address +=", src)
        self.assertNotIn("memory[address] =", src)

    def test_input_halts_with_a_return_at_top_level(self) -> None:
        src = generate_source(_chain(","))
        self.assertIn("return address", src)
        self.assertNotIn("raise _Halt", src)

    def test_deep_nesting_is_hoisted(self) -> None:
        program = "[" * 6 + "," + "]" * 6
        self.assertEqual(nesting_depth(_chain(program)), 6)
        src = generate_source(_chain(program), RuntimeConfig(inline_depth=2))
        self.assertIn("def _loop_", src)
        self.assertIn("raise _Halt(address)", src)
        self.assertIn("except _Halt as halt:", src)

    def test_same_chain_shares_one_routine(self) -> None:
        self.assertIs(specialize(_chain("+.")), specialize(_chain("+.")))

    def test_specialize_rejects_non_chains(self) -> None:
        with self.assertRaises(TypeError):
            specialize("+.")


class SpecializedBehaviourTests(unittest.TestCase):
    PROGRAMS = [
        ("++++++++[>++++++++<-]>+.", b""),
        (",[.,]", b"echo"),
        (">,[>,]<[.<]", b"xyz"),
        ("++[>++[>++<-]<-]>>.", b""),
        (">,----------[++++++++++>,----------]<[.<]", b"ab\n"),
    ]

    def test_matches_reference_interpreter(self) -> None:
        for source, stdin in self.PROGRAMS:
            with self.subTest(source=source):
                address, out, memory = _call(specialize(_chain(source)), stdin)
                ref_out, ref_address, ref_memory = reference_run(source, stdin, 64)
                self.assertEqual(out, ref_out)
                self.assertEqual(address, ref_address)
                self.assertEqual(memory, ref_memory)

    def test_hoisted_routine_matches_inline_routine(self) -> None:
        source = "++[>+++[>++[>+[>+<-]<-]<-]<-]>>>>.,[[[[.,]]]]"
        inline = _call(specialize(_chain(source)), b"hi")
        hoisted = _call(specialize(_chain(source), RuntimeConfig(inline_depth=1)), b"hi")
        self.assertEqual(inline, hoisted)
        self.assertEqual(inline[1][0], 12)

    def test_halt_inside_hoisted_loop_ends_the_program(self) -> None:
        source = "+[>+[>+[>,]<]<]" + "+" * 65 + "."
        fn = specialize(_chain(source), RuntimeConfig(inline_depth=1))
        address, out, _ = _call(fn, b"\x01\x01")
        self.assertEqual(out, b"")
        self.assertEqual(address, 5)

    def test_tape_fault(self) -> None:
        fn = specialize(_chain("<"))
        with self.assertRaises(brainfly_lang.TapeFault):
            _call(fn)
        fn = specialize(_chain("+[>+]"))
        with self.assertRaises(brainfly_lang.TapeFault):
            _call(fn, memory_size=16)


if __name__ == "__main__":
    unittest.main(verbosity=2)
