"""Starter entries an admin can seed into an empty or partial catalog."""
from __future__ import annotations

from typing import Any

SAMPLE_ENTRIES: list[dict[str, Any]] = [
    {
        "name": "AutoCAD",
        "description": "Industry-standard 2D and 3D CAD software for design and drafting",
        "price": 1690,
        "price_type": "subscription",
        "rating": 4.5,
        "difficulty": 3,
        "platforms": ["Windows", "Mac", "Web"],
        "features": ["2D Drafting", "3D Modeling", "Documentation", "Collaboration"],
        "categories": ["3D CAD Software"],
        "website_url": "https://www.autodesk.com/products/autocad",
    },
    {
        "name": "SolidWorks",
        "description": "Professional 3D CAD software for product design and engineering",
        "price": 3995,
        "price_type": "subscription",
        "rating": 4.7,
        "difficulty": 3,
        "platforms": ["Windows"],
        "features": ["3D Modeling", "Simulation", "CAM", "Data Management"],
        "categories": ["3D CAD Software"],
        "website_url": "https://www.solidworks.com",
    },
    {
        "name": "Fusion 360",
        "description": "Cloud-based 3D CAD/CAM software for product development",
        "price": 545,
        "price_type": "subscription",
        "rating": 4.4,
        "difficulty": 2,
        "platforms": ["Windows", "Mac", "Web"],
        "features": ["3D Modeling", "CAM", "Simulation", "Collaboration"],
        "categories": ["3D CAD Software"],
        "website_url": "https://www.autodesk.com/products/fusion-360",
    },
    {
        "name": "FreeCAD",
        "description": "Open-source parametric 3D CAD modeler",
        "price": 0,
        "price_type": "free",
        "rating": 3.8,
        "difficulty": 3,
        "platforms": ["Windows", "Mac", "Linux"],
        "features": ["3D Modeling", "Parametric Design", "FEM Analysis", "Open Source"],
        "categories": ["Free CAD Software"],
        "website_url": "https://www.freecad.org",
    },
    {
        "name": "SketchUp",
        "description": "Easy-to-use 3D modeling software for architecture and design",
        "price": 299,
        "price_type": "subscription",
        "rating": 4.2,
        "difficulty": 1,
        "platforms": ["Windows", "Mac", "Web"],
        "features": ["3D Modeling", "Architecture", "Visualization", "Easy Learning"],
        "categories": ["3D CAD Software"],
        "website_url": "https://www.sketchup.com",
    },
    {
        "name": "Blender",
        "description": "Free and open-source 3D creation suite",
        "price": 0,
        "price_type": "free",
        "rating": 4.6,
        "difficulty": 4,
        "platforms": ["Windows", "Mac", "Linux"],
        "features": ["3D Modeling", "Animation", "Rendering", "Sculpting"],
        "categories": ["Free CAD Software"],
        "website_url": "https://www.blender.org",
    },
]
