"""Script to report sample lost/found items and show the matches they produce"""
import requests
import time

API_BASE_URL = "http://localhost:8000/api"

# (reporting user, item payload)
SAMPLE_ITEMS = [
    (1, {
        "title": "Black iPhone 13",
        "description": "Black iPhone 13 with a cracked screen and a blue case",
        "category": "electronics",
        "status": "lost",
        "location_lost": "Library Building",
    }),
    (2, {
        "title": "Black iPhone 13",
        "description": "Black iPhone 13 with a cracked screen",
        "category": "electronics",
        "status": "found",
        "location_found": "library building, 2nd floor",
    }),
    (3, {
        "title": "Car keys",
        "description": "Toyota key fob on a red lanyard",
        "category": "keys",
        "status": "lost",
        "location_lost": "Parking Lot B",
    }),
    (4, {
        "title": "Keys on red lanyard",
        "description": "Toyota key fob on a red lanyard, found near the entrance",
        "category": "keys",
        "status": "found",
        "location_found": "Parking Lot B, north entrance",
    }),
    (5, {
        "title": "Blue backpack",
        "description": "Blue backpack with a laptop inside",
        "category": "bags",
        "status": "lost",
        "location_lost": "Student Union",
    }),
]


def report_item(user_id: int, payload: dict):
    """Report one item as the given user"""
    response = requests.post(f"{API_BASE_URL}/items", json=payload, headers={"X-User-Id": str(user_id)})

    if response.status_code == 201:
        item = response.json()
        print(f"✓ Reported {item['status']} item #{item['id']}: {item['title']}")
        return item
    else:
        print(f"✗ Error: {response.status_code}")
        print(response.text)
        return None


def check_item(item: dict):
    """Run match evaluation synchronously, for setups without a Celery worker"""
    if item["status"] == "lost":
        response = requests.post(f"{API_BASE_URL}/match/check-lost", json={"lostItemId": item["id"]})
    else:
        response = requests.post(f"{API_BASE_URL}/match/check-found", json={"foundItemId": item["id"]})
    if response.status_code == 200:
        return response.json()
    return None


def main():
    print("=" * 60)
    print("LOST & FOUND MATCHING - SAMPLE DATA LOADER")
    print("=" * 60)

    items = []
    for user_id, payload in SAMPLE_ITEMS:
        item = report_item(user_id, payload)
        if item:
            items.append(item)
        time.sleep(0.5)

    print("\n" + "=" * 60)
    print("CHECKING MATCHES")
    print("=" * 60)

    for item in items:
        result = check_item(item)
        if result:
            print(f"Item #{item['id']}: {result['message']}")

    print("\n" + "=" * 60)
    print("MATCHES PER USER")
    print("=" * 60)

    for user_id in sorted({user_id for user_id, _ in SAMPLE_ITEMS}):
        response = requests.get(f"{API_BASE_URL}/match/list", headers={"X-User-Id": str(user_id)})
        if response.status_code != 200:
            continue

        listing = response.json()
        print(f"\n👤 User {user_id}: {listing['count']} match(es)")
        for match in listing["matches"]:
            print(f"   Match #{match['id']}: lost #{match['lost_item_id']} ↔ found #{match['found_item_id']}")
            print(f"   Score: {match['match_score']} ({match['status']})")

    print("\n" + "=" * 60)
    print("SAMPLE DATA LOADED SUCCESSFULLY!")
    print("=" * 60)


if __name__ == "__main__":
    main()
