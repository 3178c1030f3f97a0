from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape


class Templater:
    def __init__(self):
        self.file_loader = FileSystemLoader(Path(__file__).parent.parent / "templates")
        self.env = Environment(loader=self.file_loader, autoescape=select_autoescape(["html"]))
        self.label_template = self.env.get_template("qr_label.html")

    def render_label(self, data: dict[str, any]) -> str:
        return self.label_template.render(data=data)
