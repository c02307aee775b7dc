# tests/test_league_api.py
from league_iq.errors import AdapterUnavailable
from league_iq.main import app
from league_iq.routers.standings import get_adapter

LEAGUE_ID = 1001


def _pick(pid, name, position, points, captain=False, vice=False, multiplier=1):
    return {
        "player_id": pid,
        "name": name,
        "position": position,
        "points": points,
        "multiplier": multiplier,
        "is_captain": captain,
        "is_vice_captain": vice,
    }


def _seed_league(client):
    r = client.post("/leagues/", json={"id": LEAGUE_ID, "name": "Office League"})
    assert r.status_code == 200, r.text

    r = client.post(
        "/gameweeks/",
        json=[{"id": 1, "is_finished": True}, {"id": 2, "is_current": True}],
    )
    assert r.status_code == 200, r.text

    gw1 = {
        "entries": [
            {
                "entry_id": 11,
                "team_name": "Alpha XI",
                "manager_name": "Alex",
                "gw_points": 64,
                "total_points": 64,
                "bench_points": 5,
                "picks": [
                    _pick(10, "Salah", 1, 8, captain=True),
                    _pick(20, "Haaland", 2, 13, vice=True),
                    _pick(12, "Pope", 12, 5),
                ],
            },
            {
                "entry_id": 22,
                "team_name": "Beta United",
                "manager_name": "Bo",
                "gw_points": 58,
                "total_points": 58,
                "bench_points": 1,
                "picks": [
                    _pick(30, "Palmer", 1, 6, captain=True),
                    _pick(40, "Isak", 2, 2, vice=True),
                ],
            },
        ]
    }
    r = client.post(f"/snapshots/{LEAGUE_ID}/1", json=gw1)
    assert r.status_code == 200, r.text
    assert r.json() == {"inserted": 2, "updated": 0}

    gw2 = {
        "entries": [
            {
                "entry_id": 22,
                "team_name": "Beta United",
                "manager_name": "Bo",
                "gw_points": 72,
                "total_points": 130,
                "bench_points": 0,
                "transfer_cost": 4,
                "chip": "3xc",
                "picks": [
                    _pick(30, "Palmer", 1, 6, captain=True, multiplier=3),
                    _pick(50, "Watkins", 2, 9, vice=True),
                ],
                "transfers": [
                    {"player_in_id": 50, "player_in_name": "Watkins", "player_out_id": 40, "player_out_name": "Isak"}
                ],
            },
            {
                "entry_id": 11,
                "team_name": "Alpha XI",
                "manager_name": "Alex",
                "gw_points": 50,
                "total_points": 114,
                "bench_points": 7,
                "picks": [
                    _pick(10, "Salah", 1, 4, vice=True),
                    _pick(20, "Haaland", 2, 10, captain=True),
                ],
            },
        ]
    }
    r = client.post(f"/snapshots/{LEAGUE_ID}/2", json=gw2)
    assert r.status_code == 200, r.text

    r = client.post("/snapshots/player-points/2", json=[{"player_id": 40, "name": "Isak", "points": 3}])
    assert r.status_code == 200, r.text
    assert r.json() == {"inserted": 1, "updated": 0}


def test_league_registration(client):
    r = client.post("/leagues/", json={"id": 77, "name": "  Family  "})
    assert r.status_code == 200
    assert r.json() == {"id": 77, "name": "Family"}

    r = client.post("/leagues/", json={"id": 77, "name": "Again"})
    assert r.status_code == 400

    r = client.get("/leagues/77")
    assert r.status_code == 200 and r.json()["name"] == "Family"
    assert client.get("/leagues/78").status_code == 404
    assert [l["id"] for l in client.get("/leagues/").json()] == [77]


def test_current_gameweek_flag_is_exclusive(client):
    assert client.get("/gameweeks/current").json()["current_gw"] is None

    client.post("/gameweeks/", json=[{"id": 3, "is_current": True}])
    r = client.post("/gameweeks/", json=[{"id": 4, "is_current": True}])
    assert r.status_code == 200
    assert client.get("/gameweeks/current").json()["current_gw"] == 4

    assert client.post("/gameweeks/", json=[{"id": 0}]).status_code == 422


def test_standings_endpoint(client):
    _seed_league(client)

    r = client.get(f"/standings/{LEAGUE_ID}")
    assert r.status_code == 200, r.text
    js = r.json()
    assert (js["gw"], js["current_gw"], js["live"]) == (2, 2, True)
    rows = js["standings"]
    assert [(x["entry_id"], x["rank"], x["previous_rank"], x["movement"]) for x in rows] == [
        (22, 1, 2, 1),
        (11, 2, 1, -1),
    ]
    assert rows[0]["transfer_count"] == 1
    assert js["stats"]["most_points"]["entry_id"] == 22
    assert js["stats"]["most_bench"]["entry_id"] == 11

    r = client.get(f"/standings/{LEAGUE_ID}", params={"gw": 1})
    js = r.json()
    assert js["live"] is False
    assert [x["entry_id"] for x in js["standings"]] == [11, 22]
    assert all(x["previous_rank"] is None for x in js["standings"])


def test_standings_rejects_bad_requests(client):
    _seed_league(client)
    assert client.get(f"/standings/{LEAGUE_ID}", params={"gw": 3}).status_code == 400
    assert client.get("/standings/4040").status_code == 404


def test_activity_endpoint(client):
    _seed_league(client)

    r = client.get(f"/activity/{LEAGUE_ID}")
    assert r.status_code == 200, r.text
    rows = {x["entry_id"]: x for x in r.json()}

    bo = rows[22]
    assert bo["transfer_impact_gross"] == 6
    assert bo["transfer_hit_cost"] == -4
    assert bo["transfer_impact_net"] == 2
    assert bo["chip"] == "3xc"
    assert bo["chip_impact"] == 6
    assert bo["chip_captain_name"] == "Palmer"
    assert bo["captain_impact"] == 0
    assert bo["gw_decision_score"] == 8
    assert bo["running_influence_total"] == 8
    assert bo["transfers"][0]["player_out_points"] == 3

    alex = rows[11]
    assert alex["previous_captain_name"] == "Salah"
    assert alex["current_captain_name"] == "Haaland"
    assert alex["captain_impact"] == 12
    assert alex["running_influence_total"] == 12


def test_chip_and_transfer_tabs(client):
    _seed_league(client)

    chips = client.get(f"/activity/{LEAGUE_ID}/chips").json()
    assert [(c["entry_id"], c["chip"]) for c in chips] == [(22, "3xc"), (11, None)]

    moves = client.get(f"/activity/{LEAGUE_ID}/transfers", params={"gw": 2}).json()
    assert moves[0]["transfers"][0]["impact"] == 6
    assert moves[1]["transfers"] == []


def test_trends_endpoint(client):
    _seed_league(client)

    r = client.get(f"/trends/{LEAGUE_ID}")
    assert r.status_code == 200, r.text
    js = r.json()
    assert (js["from_gw"], js["to_gw"], js["window"]) == (1, 2, 8)
    most = js["series"]["most_points"]
    assert [(p["gw"], p["entry_id"], p["value"]) for p in most["points"]] == [(1, 11, 64), (2, 22, 72)]
    assert most["average"] == 68.0
    assert js["series"]["best_captain_call"]["points"][1]["entry_id"] == 11

    assert client.get(f"/trends/{LEAGUE_ID}", params={"window": 0}).status_code == 422


def test_gw1_table_endpoint(client):
    _seed_league(client)

    r = client.get(f"/gw1-table/{LEAGUE_ID}")
    assert r.status_code == 200, r.text
    rows = r.json()
    assert [x["entry_id"] for x in rows] == [11, 22]
    assert rows[0]["gw_players"][0] == {"name": "Salah", "points": 8, "is_captain": True, "is_vice_captain": False}
    assert rows[0]["bench_players"] == [{"name": "Pope", "points": 5}]

    # same gameweek bounds as the other analytics tables
    assert client.get(f"/gw1-table/{LEAGUE_ID}", params={"gw": 2}).status_code == 200
    assert client.get(f"/gw1-table/{LEAGUE_ID}", params={"gw": 3}).status_code == 400


def test_snapshot_upsert_replaces_children(client):
    _seed_league(client)

    body = {
        "entries": [
            {
                "entry_id": 11,
                "team_name": "Alpha XI",
                "manager_name": "Alex",
                "gw_points": 64,
                "total_points": 64,
                "picks": [_pick(20, "Haaland", 1, 13, captain=True)],
            }
        ]
    }
    r = client.post(f"/snapshots/{LEAGUE_ID}/1", json=body)
    assert r.json() == {"inserted": 0, "updated": 1}

    rows = client.get(f"/gw1-table/{LEAGUE_ID}").json()
    alex = next(x for x in rows if x["entry_id"] == 11)
    assert [p["name"] for p in alex["gw_players"]] == ["Haaland"]
    assert alex["bench_players"] == []

    assert client.post("/snapshots/9999/1", json=body).status_code == 404


class _DownAdapter:
    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise AdapterUnavailable("feed timed out")

        return fail


def test_adapter_failure_maps_to_503(client):
    _seed_league(client)
    app.dependency_overrides[get_adapter] = lambda: _DownAdapter()

    r = client.get(f"/standings/{LEAGUE_ID}")
    assert r.status_code == 503
    assert r.json()["detail"] == "League data is temporarily unavailable"
    assert client.get(f"/trends/{LEAGUE_ID}").status_code == 503
