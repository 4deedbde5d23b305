import tkinter as tk
from tkinter import filedialog, messagebox
from pathlib import Path
from PIL import Image, ImageTk

import viewer_style as style
from bmpdecoder import BMPError, decode_bmp, encode_bmp, header_info
from filters import FILTERS, apply_filter, snapshot
from preview import rows_to_pil, compute_rgb_histograms, plot_histogram_image


def toolbar_button(parent, text, command):
    btn = tk.Button(parent, text=text, command=command,
                    bg=style.BG_BUTTON, fg=style.FG_BUTTON,
                    font=style.FONT_BUTTON, relief="flat", padx=10, pady=4)
    btn.pack(side="left", padx=5)
    return btn


# ==== BMP Viewer ====
class BMPViewer(tk.Frame):
    def __init__(self, master, file_path=None):
        super().__init__(master, bg=style.BG_MAIN)
        self.master = master
        self.pack(fill="both", expand=True)

        # Toolbar
        toolbar = tk.Frame(self, bg=style.BG_TOOLBAR, padx=10, pady=8)
        toolbar.pack(side="top", fill="x")
        toolbar_button(toolbar, "Open BMP", self.open_bmp)
        for flag, (name, _) in FILTERS.items():
            toolbar_button(toolbar, name.capitalize(), lambda f=flag: self.run_filter(f))
        toolbar_button(toolbar, "Reset", self.reset)
        toolbar_button(toolbar, "Save As", self.save_bmp)
        toolbar_button(toolbar, "Zoom In", self.zoom_in)
        toolbar_button(toolbar, "Zoom Out", self.zoom_out)

        # Main Frame
        main_frame = tk.Frame(self, bg=style.BG_MAIN)
        main_frame.pack(fill="both", expand=True, padx=10, pady=10)

        # Canvas frame
        canvas_frame = tk.Frame(main_frame, bg=style.BG_MAIN)
        canvas_frame.pack(side="left", fill="both", expand=True, padx=(0,10))
        self.canvas = tk.Canvas(canvas_frame, bg=style.BG_PANEL, cursor="cross")
        self.canvas.pack(side="top", fill="both", expand=True)
        self.scroll_y = tk.Scrollbar(canvas_frame, orient="vertical", command=self.canvas.yview)
        self.scroll_y.pack(side="right", fill="y")
        self.scroll_x = tk.Scrollbar(main_frame, orient="horizontal", command=self.canvas.xview)
        self.scroll_x.pack(side="bottom", fill="x")
        self.canvas.configure(yscrollcommand=self.scroll_y.set, xscrollcommand=self.scroll_x.set)

        self.canvas.bind("<Button-1>", self.get_pixel_info)
        self.canvas.bind("<ButtonPress-2>", self.start_pan)
        self.canvas.bind("<B2-Motion>", self.pan_image)
        self.canvas.bind("<MouseWheel>", self.on_mousewheel)
        self.canvas.bind("<Button-4>", self.on_mousewheel_linux)
        self.canvas.bind("<Button-5>", self.on_mousewheel_linux)

        # Histogram strip under the canvas
        self.hist_frame = tk.Frame(canvas_frame, bg=style.BG_MAIN)
        self.hist_frame.pack(side="bottom", fill="x", pady=(10,0))

        # Info Panel
        info_frame = tk.Frame(main_frame, bg=style.BG_PANEL, bd=2, relief="groove", padx=15, pady=15)
        info_frame.pack(side="right", fill="y")
        tk.Label(info_frame, text="Pixel Info", font=style.FONT_HEADER,
                 bg=style.BG_PANEL, fg=style.FG_TEXT).pack(anchor="w", pady=(0,5))
        self.pixel_label = tk.Label(info_frame,
            text="Click on the image to view pixel RGB values.",
            font=style.FONT_TEXT, justify="left", bg=style.BG_PANEL, fg=style.FG_SUBTEXT)
        self.pixel_label.pack(anchor="w", pady=(0,10))
        self.color_preview = tk.Canvas(info_frame, width=80, height=50, bg="#cccccc", bd=1, relief="solid")
        self.color_preview.pack(anchor="w", pady=(0,20))
        tk.Frame(info_frame, height=2, bg="#e0e0e0").pack(fill="x", pady=10)
        tk.Label(info_frame, text="Header Info", font=style.FONT_HEADER,
                 bg=style.BG_PANEL, fg=style.FG_TEXT).pack(anchor="w", pady=(0,5))
        self.header_text = tk.Text(info_frame, height=16, width=36,
                                   font=style.FONT_MONO, bg="#f9f9f9", fg="#222",
                                   relief="flat", wrap="none")
        self.header_text.pack(anchor="w", pady=(0,5))
        self.header_text.configure(state="disabled")
        self.status_label = tk.Label(info_frame, text="No filter applied",
                                     font=style.FONT_TEXT, bg=style.BG_PANEL, fg=style.FG_SUBTEXT)
        self.status_label.pack(anchor="w", pady=(10,0))

        # Vars
        self.original_rows = None
        self.rgb_rows = None
        self.bmp = None
        self.image = None
        self.tk_img = None
        self.zoom_factor = 1.0
        self.filename = file_path
        self.pan_start = None
        self.hist_refs = []

        if file_path:
            self.load_bmp(file_path)

    # ==== File Handling ====
    def open_bmp(self):
        file_path = filedialog.askopenfilename(filetypes=[("BMP files","*.bmp")])
        if file_path:
            self.load_bmp(file_path)

    def load_bmp(self, file_path):
        try:
            rows, bmp = decode_bmp(Path(file_path))
        except (BMPError, OSError) as e:
            messagebox.showerror("Error", f"Failed to open BMP file:\n{e}")
            return
        self.filename = file_path
        self.bmp = bmp
        self.original_rows = rows
        self.zoom_factor = 1.0
        self.show_header_info()
        self.reset()

    def save_bmp(self):
        if self.rgb_rows is None:
            return
        file_path = filedialog.asksaveasfilename(defaultextension=".bmp", filetypes=[("BMP files","*.bmp")])
        if not file_path:
            return
        try:
            encode_bmp(Path(file_path), self.rgb_rows, self.bmp)
        except OSError as e:
            messagebox.showerror("Error", f"Could not create {file_path}:\n{e}")

    # ==== Filters ====
    def run_filter(self, flag):
        if self.original_rows is None:
            return
        # always filter the decoded original, never a previous result
        self.rgb_rows = snapshot(self.original_rows)
        name = apply_filter(flag, self.rgb_rows)
        self.status_label.config(text=f"Filter: {name}")
        self.refresh()

    def reset(self):
        if self.original_rows is None:
            return
        self.rgb_rows = snapshot(self.original_rows)
        self.status_label.config(text="No filter applied")
        self.refresh()

    def refresh(self):
        img = rows_to_pil(self.rgb_rows)
        # file order is bottom-up unless the height is negative
        if not self.bmp.top_down:
            img = img.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
        self.image = img
        self.display_image()
        self.show_histograms()

    # ==== Display & Zoom ====
    def display_image(self):
        img = self.image
        # a 0-pixel BMP decodes fine but has nothing to draw
        if img is None or not (img.width and img.height):
            return
        size = (max(1, int(img.width * self.zoom_factor)),
                max(1, int(img.height * self.zoom_factor)))
        self.tk_img = ImageTk.PhotoImage(img.resize(size, Image.Resampling.NEAREST))
        self.canvas.delete("all")
        self.canvas.create_image(0, 0, anchor="nw", image=self.tk_img)
        self.canvas.config(scrollregion=self.canvas.bbox("all"))

    def set_zoom(self, factor):
        self.zoom_factor = min(max(self.zoom_factor * factor, 0.05), 40.0)
        self.display_image()

    def zoom_in(self):
        self.set_zoom(1.25)

    def zoom_out(self):
        self.set_zoom(1 / 1.25)

    def on_mousewheel(self, event):
        if event.delta > 0:
            self.zoom_in()
        else:
            self.zoom_out()

    def on_mousewheel_linux(self, event):
        # X11 reports the wheel as buttons 4 and 5
        if event.num == 4:
            self.zoom_in()
        elif event.num == 5:
            self.zoom_out()

    # ==== Panning ====
    def start_pan(self, event):
        self.pan_start = (event.x, event.y)

    def pan_image(self, event):
        if not self.pan_start:
            return
        start_x, start_y = self.pan_start
        self.canvas.xview_scroll(int((start_x - event.x) / 2), "units")
        self.canvas.yview_scroll(int((start_y - event.y) / 2), "units")
        self.pan_start = (event.x, event.y)

    # ==== Pixel info ====
    def canvas_to_image(self, event):
        x = int(self.canvas.canvasx(event.x) / self.zoom_factor)
        y = int(self.canvas.canvasy(event.y) / self.zoom_factor)
        return x, y

    def get_pixel_info(self, event):
        if self.image is None:
            return
        x, y = self.canvas_to_image(event)
        if not (0 <= x < self.image.width and 0 <= y < self.image.height):
            return
        r, g, b = self.image.getpixel((x, y))[:3]
        self.pixel_label.config(text=f"X: {x}\nY: {y}\nR: {r}\nG: {g}\nB: {b}")
        self.color_preview.config(bg=f"#{r:02x}{g:02x}{b:02x}")

    # ==== Header info ====
    def show_header_info(self):
        if self.bmp is None:
            return
        info = header_info(Path(self.filename), self.bmp)
        self.header_text.configure(state="normal")
        self.header_text.delete("1.0", "end")
        self.header_text.insert("1.0", "\n".join(f"{k}: {v}" for k, v in info.items()))
        self.header_text.configure(state="disabled")

    # ==== Histograms ====
    def show_histograms(self):
        for w in self.hist_frame.winfo_children():
            w.destroy()
        self.hist_refs.clear()

        rhist, ghist, bhist = compute_rgb_histograms(self.rgb_rows)
        for name, hist, color in (("R", rhist, "red"), ("G", ghist, "green"), ("B", bhist, "blue")):
            frame = tk.Frame(self.hist_frame, bg=style.BG_MAIN)
            frame.pack(side="left", padx=5, pady=5)
            tk.Label(frame, text=f"{name} Histogram", bg=style.BG_MAIN).pack()
            hist_img = ImageTk.PhotoImage(plot_histogram_image(hist, color=color, width=200, height=100))
            tk.Label(frame, image=hist_img, bg=style.BG_MAIN).pack()
            self.hist_refs.append(hist_img)


# ==== Main ====
if __name__ == "__main__":
    import sys
    root = tk.Tk()
    root.title("BMP Filter Viewer")
    root.geometry("1200x800")
    app = BMPViewer(root, sys.argv[1] if len(sys.argv) > 1 else None)
    root.mainloop()
