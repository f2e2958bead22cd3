"""HelixPlot plugin manifest."""

manifest = {
    "title": "HelixPlot",
    "summary": "Parse real/complex function definitions, detect the plot mode and sample curves or surfaces.",
    "category": "Visualization",
    "blueprint": "helix_plot",
    "api": "/api/helix_plot",
}

__all__ = ["manifest"]
