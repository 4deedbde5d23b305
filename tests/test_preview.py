from PIL import Image

from preview import compute_rgb_histograms, plot_histogram_image, rows_to_pil


class TestPreview:

    def test_rows_to_pil(self, gradient_rows):
        img = rows_to_pil(gradient_rows)
        assert img.mode == "RGB"
        assert img.size == (5, 4)
        assert img.getpixel((3, 2)) == gradient_rows[2][3]
        assert img.getpixel((0, 3)) == gradient_rows[3][0]

    def test_histograms(self):
        rows = [[(0, 10, 255), (0, 20, 255)], [(5, 10, 255), (0, 10, 0)]]
        rhist, ghist, bhist = compute_rgb_histograms(rows)
        assert sum(rhist) == sum(ghist) == sum(bhist) == 4
        assert rhist[0] == 3 and rhist[5] == 1
        assert ghist[10] == 3 and ghist[20] == 1
        assert bhist[255] == 3 and bhist[0] == 1

    def test_plot_histogram_image(self):
        hist = [i % 7 for i in range(256)]
        img = plot_histogram_image(hist, color="red", width=200, height=100)
        assert isinstance(img, Image.Image)
        assert img.size == (200, 100)

    def test_plot_empty_histogram(self):
        img = plot_histogram_image([0] * 256, width=300, height=100)
        assert img.size == (300, 100)
