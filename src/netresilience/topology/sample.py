"""Built-in sample: telecom infrastructure in rural Philippines."""

from .models import Graph

SAMPLE_TOPOLOGY = {
    "nodes": [
        {"id": "1", "label": "Cebu Hub", "x": 300, "y": 100, "kind": "hub"},
        {"id": "2", "label": "Cebu City", "x": 200, "y": 180, "kind": "city"},
        {"id": "3", "label": "Mandaue Hub", "x": 150, "y": 250, "kind": "hub"},
        {"id": "4", "label": "Banilad", "x": 100, "y": 320, "kind": "city"},
        {"id": "5", "label": "Subangdaku", "x": 200, "y": 320, "kind": "city"},
        {"id": "6", "label": "Nau", "x": 250, "y": 380, "kind": "barangay"},
        {"id": "7", "label": "Baco", "x": 150, "y": 380, "kind": "barangay"},
        {"id": "8", "label": "Palawan Hub", "x": 50, "y": 200, "kind": "hub"},
        {"id": "9", "label": "El Nido", "x": 30, "y": 280, "kind": "city"},
        {"id": "10", "label": "Puerto Princesa", "x": 80, "y": 350, "kind": "city"},
        {"id": "11", "label": "Quezon Hub", "x": 400, "y": 180, "kind": "hub"},
        {"id": "12", "label": "Lucena", "x": 450, "y": 250, "kind": "city"},
        {"id": "13", "label": "Tayabas", "x": 500, "y": 300, "kind": "barangay"},
    ],
    "edges": [
        {"source": "1", "target": "2", "isActive": True},
        {"source": "1", "target": "11", "isActive": True},
        {"source": "2", "target": "3", "isActive": True},
        {"source": "2", "target": "8", "isActive": True},
        {"source": "3", "target": "4", "isActive": True},
        {"source": "3", "target": "5", "isActive": True},
        {"source": "4", "target": "7", "isActive": True},
        {"source": "5", "target": "6", "isActive": True},
        {"source": "5", "target": "7", "isActive": True},
        {"source": "8", "target": "9", "isActive": True},
        {"source": "8", "target": "10", "isActive": True},
        {"source": "11", "target": "12", "isActive": True},
        {"source": "12", "target": "13", "isActive": True},
    ],
}


def sample_graph() -> Graph:
    """Return a fresh copy of the sample topology."""
    return Graph.from_dict(SAMPLE_TOPOLOGY)
