"""
Demo resources loaded into a fresh in-memory store: one of each type,
placed around downtown Atlanta (the default map city).
"""

from typing import List

from app.models.resource import ResourceCreate


def sample_resources() -> List[ResourceCreate]:
    return [
        ResourceCreate(
            name="Hope Day Center",
            type="shelter",
            address="123 Main St, Atlanta, GA",
            latitude="33.7537",
            longitude="-84.3863",
            hours="Mon-Fri: 8am-4pm",
            notes="Provides showers, laundry, and case management",
        ),
        ResourceCreate(
            name="Community Kitchen",
            type="food",
            address="456 Oak Ave, Atlanta, GA",
            latitude="33.7512",
            longitude="-84.3901",
            hours="Daily: 11am-1pm, 5pm-7pm",
            notes="Free hot meals, no ID required",
        ),
        ResourceCreate(
            name="City Park Water Fountain",
            type="water",
            address="789 Park Rd, Atlanta, GA",
            latitude="33.7601",
            longitude="-84.3793",
            hours="24/7",
            notes="Wheelchair accessible",
        ),
        ResourceCreate(
            name="Public Library WiFi",
            type="wifi",
            address="101 Library Lane, Atlanta, GA",
            latitude="33.7574",
            longitude="-84.3866",
            hours="Mon-Sat: 9am-8pm, Sun: 12pm-5pm",
            notes="Free WiFi, computer access with library card",
        ),
        ResourceCreate(
            name="Community Center Cooling Station",
            type="weather",
            address="202 Community Way, Atlanta, GA",
            latitude="33.7458",
            longitude="-84.3912",
            hours="Open during extreme weather events",
            notes="Air conditioning, water, and seating available",
        ),
        ResourceCreate(
            name="Downtown Public Restroom",
            type="restroom",
            address="303 Central Ave, Atlanta, GA",
            latitude="33.7489",
            longitude="-84.3881",
            hours="6am-10pm",
            notes="ADA accessible",
        ),
        ResourceCreate(
            name="Community Health Clinic",
            type="health",
            address="404 Medical Dr, Atlanta, GA",
            latitude="33.7625",
            longitude="-84.3848",
            hours="Mon-Fri: 9am-5pm",
            notes="Free basic health services, walk-ins welcome",
        ),
    ]
