"""Общие фикстуры для тестов codecraft.qr: по одной корректной нагрузке на каждый тип."""

from typing import Any, Dict

import pytest

from codecraft.model.enums import PayloadType


@pytest.fixture
def valid_payloads() -> Dict[PayloadType, Dict[str, Any]]:
    return {
        PayloadType.WEBSITE: {"url": "https://example.com", "title": "Example"},
        PayloadType.PDF: {"url": "https://example.com/files/report.pdf"},
        PayloadType.IMAGES: {
            "title": "Gallery",
            "images": [
                {"url": "https://example.com/a.jpg", "caption": "A"},
                {"url": "https://example.com/b.jpg"},
            ],
        },
        PayloadType.VIDEO: {"url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ"},
        PayloadType.WIFI: {
            "ssid": "MyNetwork",
            "password": "password123",
            "security": "WPA",
            "hidden": False,
        },
        PayloadType.MENU: {
            "restaurantName": "Test Restaurant",
            "categories": [
                {
                    "name": "Mains",
                    "items": [
                        {"name": "Pasta", "price": 12.5},
                        {"name": "Water", "price": 0},
                    ],
                }
            ],
        },
        PayloadType.BUSINESS: {
            "name": "Acme Corp",
            "email": "info@acme.com",
            "website": "https://acme.com",
            "phone": "+1 555 000 1111",
        },
        PayloadType.VCARD: {
            "firstName": "John",
            "lastName": "Doe",
            "organization": "Acme Corp",
            "phone": "+15551234567",
            "email": "john@acme.com",
        },
        PayloadType.MP3: {"url": "https://example.com/song.mp3", "title": "Song"},
        PayloadType.APPS: {
            "appName": "Acme",
            "appStoreUrl": "https://apps.apple.com/app/id123",
            "playStoreUrl": "https://play.google.com/store/apps/details?id=com.acme",
        },
        PayloadType.LINKS_LIST: {
            "title": "My links",
            "links": [{"title": "Home", "url": "https://example.com"}],
        },
        PayloadType.COUPON: {"code": "SAVE20", "discount": "20%", "validUntil": "2030-12-31"},
        PayloadType.FACEBOOK: {"pageUrl": "https://facebook.com/acme"},
        PayloadType.INSTAGRAM: {"profileUrl": "https://instagram.com/acme"},
        PayloadType.SOCIAL_MEDIA: {
            "facebook": "https://facebook.com/user",
            "twitter": "https://twitter.com/user",
        },
        PayloadType.WHATSAPP: {"phoneNumber": "+1 234 567 890", "message": "Hello from QR"},
        PayloadType.TEXT: {"text": "Hello, world"},
        PayloadType.EMAIL: {"to": "test@example.com", "subject": "Hello", "body": "Test message"},
        PayloadType.SMS: {"phoneNumber": "+15551234567", "message": "Hi"},
        PayloadType.PHONE: {"phoneNumber": "+1 (555) 123-4567"},
        PayloadType.LOCATION: {"latitude": 40.7128, "longitude": -74.006, "address": "New York"},
        PayloadType.EVENT: {
            "title": "Launch",
            "startDate": "2024-03-15T10:00:00Z",
            "endDate": "2024-03-15T12:00:00Z",
            "location": "HQ",
        },
    }
