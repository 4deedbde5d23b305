import pytest

from bmpdecoder import decode_bmp
from main import (EXIT_CREATE_OUTFILE, EXIT_INVALID_FILTER, EXIT_MULTIPLE_FILTERS, EXIT_OK,
                  EXIT_OPEN_INFILE, EXIT_UNSUPPORTED, EXIT_USAGE, main)


class TestCommandLine:

    @pytest.fixture
    def infile(self, write_pillow_bmp, gradient_rows):
        return write_pillow_bmp(gradient_rows)

    @pytest.fixture
    def outfile(self, tmp_path):
        return tmp_path / "out.bmp"

    def test_grayscale(self, infile, outfile):
        assert main(["-g", str(infile), str(outfile)]) == EXIT_OK
        rows, bmp = decode_bmp(outfile)
        assert (bmp.width, bmp.height) == (5, 4)
        assert all(r == g == b for row in rows for (r, g, b) in row)
        assert outfile.read_bytes()[:54] == infile.read_bytes()[:54]

    @pytest.mark.parametrize("flag", ["-b", "-e", "-r", "-s"])
    def test_each_filter(self, flag, infile, outfile):
        assert main([flag, str(infile), str(outfile)]) == EXIT_OK
        assert outfile.stat().st_size == infile.stat().st_size

    def test_reflect_matches_engine(self, infile, outfile, gradient_rows):
        assert main(["-r", str(infile), str(outfile)]) == EXIT_OK
        rows, _ = decode_bmp(outfile)
        assert rows[::-1] == [row[::-1] for row in gradient_rows]

    def test_flag_after_files(self, infile, outfile):
        assert main([str(infile), str(outfile), "-s"]) == EXIT_OK

    def test_invalid_flag(self, infile, outfile, capsys):
        assert main(["-x", str(infile), str(outfile)]) == EXIT_INVALID_FILTER
        assert "Invalid filter." in capsys.readouterr().err

    @pytest.mark.parametrize("flags", [["-g", "-x"], ["-gx"], ["-x", "-g"]])
    def test_invalid_flag_ordering(self, flags, infile, outfile, capsys):
        expected = EXIT_INVALID_FILTER if flags[0] == "-x" else EXIT_MULTIPLE_FILTERS
        assert main(flags + [str(infile), str(outfile)]) == expected
        message = "Invalid filter." if expected == EXIT_INVALID_FILTER else "Only one filter allowed."
        assert message in capsys.readouterr().err
        assert not outfile.exists()

    def test_missing_flag(self, infile, outfile):
        assert main([str(infile), str(outfile)]) == EXIT_INVALID_FILTER
        assert not outfile.exists()

    @pytest.mark.parametrize("flags", [["-g", "-s"], ["-gs"], ["-b", "-b"]])
    def test_multiple_flags(self, flags, infile, outfile, capsys):
        assert main(flags + [str(infile), str(outfile)]) == EXIT_MULTIPLE_FILTERS
        assert "Only one filter allowed." in capsys.readouterr().err

    @pytest.mark.parametrize("extra", [[], ["a.bmp"], ["a.bmp", "b.bmp", "c.bmp"]])
    def test_usage(self, extra, capsys):
        assert main(["-g"] + extra) == EXIT_USAGE
        assert "Usage:" in capsys.readouterr().err

    def test_missing_infile(self, tmp_path, outfile, capsys):
        missing = tmp_path / "nope.bmp"
        assert main(["-g", str(missing), str(outfile)]) == EXIT_OPEN_INFILE
        assert f"Could not open {missing}." in capsys.readouterr().err

    def test_uncreatable_outfile(self, infile, tmp_path, capsys):
        out = tmp_path / "no_such_dir" / "out.bmp"
        assert main(["-g", str(infile), str(out)]) == EXIT_CREATE_OUTFILE
        assert "Could not create" in capsys.readouterr().err

    def test_unsupported_depth(self, infile, outfile, capsys):
        data = bytearray(infile.read_bytes())
        data[28] = 32  # biBitCount
        infile.write_bytes(bytes(data))
        assert main(["-e", str(infile), str(outfile)]) == EXIT_UNSUPPORTED
        assert "Unsupported file format." in capsys.readouterr().err
        assert not outfile.exists()

    def test_not_a_bitmap(self, tmp_path, outfile):
        junk = tmp_path / "junk.bmp"
        junk.write_bytes(b"GIF89a" + b"\x00" * 100)
        assert main(["-b", str(junk), str(outfile)]) == EXIT_UNSUPPORTED
