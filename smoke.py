# smoke.py: end-to-end run against a local LeagueIQ API (uvicorn league_iq.main:app)
import json

import requests

BASE = "http://127.0.0.1:8000"
LEAGUE_ID = 424242


def post(path, data):
    r = requests.post(BASE + path, json=data)
    r.raise_for_status()
    return r.json()


def get(path, **params):
    r = requests.get(BASE + path, params=params)
    r.raise_for_status()
    return r.json()


def pick(pid, name, position, points, captain=False, vice=False):
    return {
        "player_id": pid,
        "name": name,
        "position": position,
        "points": points,
        "is_captain": captain,
        "is_vice_captain": vice,
    }


print("=== 1) register league ===")
existing = {l["id"] for l in get("/leagues/")}
if LEAGUE_ID not in existing:
    post("/leagues/", {"id": LEAGUE_ID, "name": "Smoke League"})

print("=== 2) gameweek state ===")
post("/gameweeks/", [{"id": 1, "is_finished": True}, {"id": 2, "is_current": True}])
print("current", get("/gameweeks/current"))

print("=== 3) snapshots ===")
post(
    f"/snapshots/{LEAGUE_ID}/1",
    {
        "entries": [
            {
                "entry_id": 1,
                "team_name": "Bulls",
                "manager_name": "Alice",
                "gw_points": 70,
                "total_points": 70,
                "picks": [pick(10, "Salah", 1, 12, captain=True), pick(20, "Saka", 2, 6, vice=True)],
            },
            {
                "entry_id": 2,
                "team_name": "Bears",
                "manager_name": "Bob",
                "gw_points": 55,
                "total_points": 55,
                "picks": [pick(30, "Palmer", 1, 2, captain=True), pick(40, "Isak", 2, 9, vice=True)],
            },
        ]
    },
)
post(
    f"/snapshots/{LEAGUE_ID}/2",
    {
        "entries": [
            {
                "entry_id": 1,
                "team_name": "Bulls",
                "manager_name": "Alice",
                "gw_points": 40,
                "total_points": 110,
                "bench_points": 4,
                "picks": [pick(10, "Salah", 1, 2, captain=True), pick(20, "Saka", 2, 5, vice=True)],
            },
            {
                "entry_id": 2,
                "team_name": "Bears",
                "manager_name": "Bob",
                "gw_points": 68,
                "total_points": 123,
                "transfer_cost": 4,
                "picks": [pick(30, "Palmer", 1, 3, vice=True), pick(50, "Watkins", 2, 11, captain=True)],
                "transfers": [
                    {"player_in_id": 50, "player_in_name": "Watkins", "player_out_id": 40, "player_out_name": "Isak"}
                ],
            },
        ]
    },
)
post("/snapshots/player-points/2", [{"player_id": 40, "name": "Isak", "points": 1}])

print("=== 4) standings ===")
print(json.dumps(get(f"/standings/{LEAGUE_ID}"), indent=2))

print("=== 5) activity ===")
print(json.dumps(get(f"/activity/{LEAGUE_ID}"), indent=2))
print(json.dumps(get(f"/activity/{LEAGUE_ID}/chips"), indent=2))
print(json.dumps(get(f"/activity/{LEAGUE_ID}/transfers"), indent=2))

print("=== 6) trends ===")
trend = get(f"/trends/{LEAGUE_ID}", window=8)
for name, series in trend["series"].items():
    print(name, [(p["gw"], p["manager_name"], p["value"]) for p in series["points"]], series["average"])

print("=== 7) gw1 table ===")
print(json.dumps(get(f"/gw1-table/{LEAGUE_ID}"), indent=2))

print("=== DONE ===")
