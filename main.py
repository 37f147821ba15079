from PyQt6.QtWidgets import QApplication

from view import ViewOptions, WingSettings
from view.wing_view import WingView

settings = WingSettings()
print(f"NACA {settings.naca}, span {settings.span:.3f}, {settings.slices} slices")

app = QApplication([])
view = WingView(
    settings=settings,
    options=ViewOptions(
        show_edges=False,
        # mirror=True,
    ),
    width=1200,
    height=800,
)
view.show()
exit(app.exec())
