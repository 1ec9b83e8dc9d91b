# app/services/seed.py
"""
Sample reports for local dev and demos (SEED_DEMO_DATA=true).

Each entry is a submission plus the review history that takes it from
"pending" to its sample status; seeding replays that history through the
normal review workflow instead of writing statuses directly.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

# (submission, [(action, reviewer, notes), ...])
DemoReport = Tuple[Dict[str, Any], List[Tuple[str, str, Optional[str]]]]


DEMO_REPORTS: List[DemoReport] = [
    (
        {
            "tracking_id": "HR-001234",
            "hazard_type": "tsunami",
            "severity": 5,
            "priority": "critical",
            "title": "Massive waves approaching Dwarka coast",
            "description": (
                "Observed extremely high waves approaching the coastline. Water level rising rapidly. "
                "Immediate evacuation recommended for coastal areas."
            ),
            "location": {"lat": 22.2394, "lng": 68.9685, "name": "Dwarka Beach, Gujarat"},
            "reporter": {"name": "Rajesh Patel", "phone": "+91 9876543210", "email": "rajesh.patel@gmail.com", "verified": True},
            "confidence": 85,
            "affected_people": 15000,
            "affected_areas": ["Dwarka", "Jamnagar", "Rajkot"],
            "media": [
                {"type": "image", "url": "https://images.unsplash.com/photo-1549480119-94776100c5c3", "name": "tsunami-waves-1.jpg"},
                {"type": "video", "url": "https://images.unsplash.com/photo-1517590457682-1c251d187768", "name": "tsunami-video.mp4"},
            ],
            "public_visibility": True,
        },
        [("start-review", "Coast Guard Station", None)],
    ),
    (
        {
            "tracking_id": "HR-001235",
            "hazard_type": "storm-surge",
            "severity": 4,
            "priority": "high",
            "title": "Storm surge warning - Chennai Port",
            "description": "Strong winds and storm surge observed at Chennai Port. Several fishing boats struggling to return to harbor.",
            "location": {"lat": 13.1067, "lng": 80.3012, "name": "Chennai Port, Tamil Nadu"},
            "reporter": {"name": "Captain S. Kumar", "phone": "+91 9123456789", "email": "s.kumar@chennaiport.gov.in", "verified": True},
            "confidence": 92,
            "affected_people": 8500,
            "affected_areas": ["Chennai", "Mahabalipuram", "Puducherry"],
            "media": [
                {"type": "image", "url": "https://images.unsplash.com/photo-1502685973808-f4de3823485d", "name": "storm-surge-1.jpg"},
            ],
            "public_visibility": True,
        },
        [("verify", "Dr. A. Sharma", "Verified by Coast Guard. Official storm surge warning issued.")],
    ),
    (
        {
            "tracking_id": "HR-001236",
            "hazard_type": "high-waves",
            "severity": 3,
            "priority": "medium",
            "title": "High waves at Kovalam Beach",
            "description": "Unusually high waves observed at Kovalam Beach. Tourists advised to maintain safe distance from shoreline.",
            "location": {"lat": 8.4004, "lng": 76.9787, "name": "Kovalam Beach, Kerala"},
            "reporter": {"name": "Beach Resort Manager", "phone": "+91 9087654321", "email": "manager@kovalamresort.com", "verified": False},
            "confidence": 67,
            "affected_people": 200,
            "affected_areas": ["Kovalam", "Varkala", "Alappuzha"],
            "public_visibility": False,
        },
        [],
    ),
    (
        {
            "tracking_id": "HR-001237",
            "hazard_type": "flooding",
            "severity": 2,
            "priority": "low",
            "title": "Minor coastal flooding in Kolkata",
            "description": "Water logging observed in low-lying coastal areas during high tide. Roads partially affected.",
            "location": {"lat": 22.5958, "lng": 88.2636, "name": "Salt Lake, Kolkata, West Bengal"},
            "reporter": {"name": "Local Resident", "phone": "+91 9234567890", "email": "resident@gmail.com", "verified": False},
            "confidence": 45,
            "affected_people": 5000,
            "media": [
                {"type": "image", "url": "https://images.unsplash.com/photo-1596707323136-23589b273d2a", "name": "minor-flooding.jpg"},
            ],
            "public_visibility": False,
        },
        [("mark-false-alarm", "City Official", "Normal tidal flooding. No emergency action required.")],
    ),
    (
        {
            "tracking_id": "HR-001238",
            "hazard_type": "erosion",
            "severity": 3,
            "priority": "medium",
            "title": "Significant beach erosion at Goa",
            "description": (
                "Noticeable loss of sand and collapse of some dunes due to recent high tides. "
                "Local authorities are being informed."
            ),
            "location": {"lat": 15.2891, "lng": 73.9213, "name": "Colva Beach, Goa"},
            "reporter": {"name": "Environmentalist Group", "phone": "+91 9543210987", "email": "goa.env@org.in", "verified": True},
            "confidence": 75,
            "media": [
                {"type": "image", "url": "https://images.unsplash.com/photo-1549495400-058869151759", "name": "erosion-goa.jpg"},
            ],
            "public_visibility": True,
        },
        [],
    ),
]
