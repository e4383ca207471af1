import pytest
from PIL import Image


@pytest.fixture
def make_png(tmp_path):
    """
    Factory: write a solid-colour PNG into tmp_path and return its path.
    Colours may be RGB or RGBA tuples; the mode follows the tuple length.
    """
    def _make(name, size=(256, 256), color=(0, 0, 0, 255)):
        mode = "RGBA" if len(color) == 4 else "RGB"
        path = tmp_path / name
        Image.new(mode, size, color).save(path)
        return path

    return _make


@pytest.fixture
def patterned_png(tmp_path):
    """
    Creates a deterministic 64x48 RGBA PNG with a strong spatial pattern,
    including partially transparent pixels. Good for pixel-exact placement tests.
    """
    w, h = 64, 48
    img = Image.new("RGBA", (w, h))
    px = img.load()

    for y in range(h):
        for x in range(w):
            r = (x * 37 + y * 17) % 256
            g = (x * 13 + y * 53) % 256
            b = (x * 97 + y * 19) % 256
            a = (x * 7 + y * 11) % 256
            px[x, y] = (r, g, b, a)

    path = tmp_path / "pattern.png"
    img.save(path)
    return path


@pytest.fixture
def text_file(tmp_path):
    path = tmp_path / "notes.png"
    path.write_text("this is not an image\n")
    return path
