from geometry import CrossSection
from view import SectionVisualizer

designations = ["0012", "2412", "4415", "23012", "23112"]
sections = [CrossSection.from_designation(code, chord=1.0, sample_count=100) for code in designations]

viz = SectionVisualizer(figsize=(12, 6))
viz.plot_comparison(
    sections,
    labels=[f"NACA {code}" for code in designations],
    title="NACA sections",
)

viz.clear_sections()
viz.add_section(
    sections[1],
    label="NACA 2412",
    color="blue",
    fill=False,
    show_points=True,
    show_normals=True,
    normal_scale=0.02,
)
viz.plot(title="NACA 2412 panels and normals")
