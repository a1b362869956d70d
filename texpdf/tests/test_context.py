import unittest
from io import StringIO

from texpdf.src.context import Console


class TestConsole(unittest.TestCase):
    def setUp(self):
        self.out = StringIO()
        self.err = StringIO()

    def test_level_none_hides_diagnostics(self):
        console = Console(stdout=self.out, stderr=self.err)

        console.info("info")
        console.error("error")
        console.debug("debug")

        self.assertEqual(self.out.getvalue(), "")
        self.assertEqual(self.err.getvalue(), "")

    def test_levels(self):
        console = Console(level="info", stdout=self.out, stderr=self.err)

        console.info("hello")
        console.debug("hidden")
        console.error("broken")

        self.assertEqual(self.out.getvalue(), "[INFO] hello\n")
        self.assertEqual(self.err.getvalue(), "[ERROR] broken\n")

    def test_dry(self):
        console = Console(dry_run=True, stdout=self.out)
        console.dry("texi2dvi --pdf main.tex")
        self.assertIn("[DRY] texi2dvi --pdf main.tex", self.out.getvalue())

    def test_stream_writes_ignore_level(self):
        console = Console(level="none", stdout=self.out, stderr=self.err)

        console.write_output("This is pdfTeX")
        console.write_output(", Version 3.14\n")
        console.write_error("can't find texi2dvi\n")

        self.assertEqual(self.out.getvalue(), "This is pdfTeX, Version 3.14\n")
        self.assertEqual(self.err.getvalue(), "can't find texi2dvi\n")


if __name__ == "__main__":
    unittest.main()
