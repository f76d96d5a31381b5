def guideline_payload(**overrides):
    payload = {
        "semester_fall": True,
        "credits": 3,
        "meeting_amount": 2,
        "days": [{"day_monday": True, "day_wednesday": True}],
        "times": [{"start_time": 900, "end_time": 1015}],
    }
    payload.update(overrides)
    return payload


def create(client, **overrides):
    response = client.post("/api/guidelines/", json=guideline_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


def test_create_returns_display_times(client):
    guideline = create(client)
    [time] = guideline["times"]
    assert time["start"] == {"hour": 9, "minute": 0, "anteMeridiemHour": 9, "anteMeridiem": "AM"}
    assert time["end"]["minute"] == 15
    assert time["difference"] == {"hours": 1, "minutes": 15}
    assert guideline["days"][0]["day_monday"] is True


def test_create_validation(client):
    assert client.post("/api/guidelines/", json=guideline_payload(credits=5)).status_code == 422
    assert client.post("/api/guidelines/", json=guideline_payload(semester_fall=False)).status_code == 422
    assert client.post("/api/guidelines/", json=guideline_payload(days=[{}])).status_code == 422
    bad_times = [{"start_time": 1000, "end_time": 900}]
    assert client.post("/api/guidelines/", json=guideline_payload(times=bad_times)).status_code == 422
    bad_minute = [{"start_time": 970, "end_time": 1100}]
    assert client.post("/api/guidelines/", json=guideline_payload(times=bad_minute)).status_code == 422


def test_query_filters(client):
    create(client)
    create(client, credits=4, meeting_amount=3, semester_fall=False, semester_spring=True)
    create(
        client,
        credits=1,
        meeting_amount=1,
        days=[{"day_friday": True}],
        times=[{"start_time": 1800, "end_time": 2050}],
    )

    everything = client.get("/api/guidelines/").json()
    assert len(everything["result"]) == 3
    assert everything["total_pages"] == 1

    spring = client.get("/api/guidelines/", params={"semester_spring": True}).json()
    assert [item["credits"] for item in spring["result"]] == [4]

    credits = client.get("/api/guidelines/", params={"credits_min": 3, "credits_max": 3}).json()
    assert [item["credits"] for item in credits["result"]] == [3]

    friday = client.get("/api/guidelines/", params={"day_friday": True}).json()
    assert [item["credits"] for item in friday["result"]] == [1]

    evening = client.get("/api/guidelines/", params={"start_time": 1700, "end_time": 2359}).json()
    assert [item["credits"] for item in evening["result"]] == [1]


def test_query_pagination(client):
    for _ in range(12):
        create(client)
    first = client.get("/api/guidelines/").json()
    second = client.get("/api/guidelines/", params={"page": 2}).json()
    assert first["total_pages"] == 2
    assert len(first["result"]) == 10
    assert len(second["result"]) == 2
    assert client.get("/api/guidelines/", params={"page": 0}).status_code == 422


def test_update_replaces_days_and_times(client):
    guideline = create(client)
    response = client.put(
        f"/api/guidelines/{guideline['id']}",
        json=guideline_payload(
            credits=4,
            days=[{"day_tuesday": True, "day_thursday": True}],
            times=[{"start_time": 1300, "end_time": 1415}, {"start_time": 1430, "end_time": 1545}],
        ),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["credits"] == 4
    assert len(body["days"]) == 1
    assert body["days"][0]["day_tuesday"] is True
    assert [time["start_time"] for time in body["times"]] == [1300, 1430]


def test_delete_and_missing(client):
    guideline = create(client)
    assert client.delete(f"/api/guidelines/{guideline['id']}").json() == {"success": True}
    missing = client.delete(f"/api/guidelines/{guideline['id']}")
    assert missing.status_code == 404
    assert missing.json()["message"] == f"Guideline with id {guideline['id']} not found"
    assert client.put("/api/guidelines/nope", json=guideline_payload()).status_code == 404
