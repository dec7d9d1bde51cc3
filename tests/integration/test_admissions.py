"""Integration tests: Beds, admissions and nurse assignments."""

import pytest
from tests.conftest import requires_db

pytestmark = requires_db
from httpx import AsyncClient


async def _admit(async_client: AsyncClient, api_base: str, ward: dict, patient_id: str = None):
    return await async_client.post(
        f"{api_base}/admissions",
        headers=ward["headers"],
        json={
            "patient_id": patient_id or ward["patient_id"],
            "doctor_id": ward["doctor_id"],
            "bed_id": ward["bed_id"],
            "admission_type": "emergency",
            "reason_for_admission": "Acute appendicitis",
        },
    )


@pytest.mark.asyncio
async def test_admit_discharge_cycle(async_client: AsyncClient, api_base: str, ward: dict):
    resp = await _admit(async_client, api_base, ward)
    assert resp.status_code == 201, resp.text
    admission = resp.json()["data"]
    assert admission["status"] == "admitted"

    resp = await async_client.get(f"{api_base}/beds/occupancy", headers=ward["headers"])
    beds = {b["id"]: b for b in resp.json()["data"]["beds"]}
    assert beds[ward["bed_id"]]["status"] == "occupied"
    assert beds[ward["bed_id"]]["current_patient_id"] == ward["patient_id"]

    # second patient into the same bed
    resp = await async_client.post(
        f"{api_base}/patients",
        headers=ward["headers"],
        json={"first_name": "Second", "last_name": "Patient"},
    )
    other_patient = resp.json()["data"]["id"]
    resp = await _admit(async_client, api_base, ward, patient_id=other_patient)
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "CONFLICT"

    resp = await async_client.post(
        f"{api_base}/admissions/{admission['id']}/vitals",
        headers=ward["headers"],
        json={"blood_pressure": "118/76", "pulse": 88, "temperature": "38.1"},
    )
    assert resp.status_code == 201

    resp = await async_client.post(
        f"{api_base}/admissions/{admission['id']}/discharge",
        headers=ward["headers"],
        json={"final_diagnosis": "Appendicitis, post-op"},
    )
    assert resp.status_code == 200
    discharged = resp.json()["data"]
    assert discharged["status"] == "discharged"
    assert discharged["total_stay_days"] >= 0
    assert len(discharged["vitals"]) == 1

    resp = await async_client.post(f"{api_base}/admissions/{admission['id']}/discharge", headers=ward["headers"])
    assert resp.status_code == 404

    resp = await async_client.get(f"{api_base}/beds/available", headers=ward["headers"])
    assert ward["bed_id"] in [b["id"] for b in resp.json()["data"]]

    resp = await async_client.post(
        f"{api_base}/billing/admissions/{admission['id']}",
        headers=ward["headers"],
        json={},
    )
    assert resp.status_code == 201, resp.text
    bill = resp.json()["data"]
    assert bill["bill_type"] == "inpatient"
    assert bill["items"][0]["item_type"] == "room-charge"

    resp = await async_client.post(
        f"{api_base}/billing/admissions/{admission['id']}",
        headers=ward["headers"],
        json={},
    )
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_bed_maintenance_blocks_admission(async_client: AsyncClient, api_base: str, ward: dict):
    resp = await async_client.patch(
        f"{api_base}/beds/{ward['bed_id']}/status",
        headers=ward["headers"],
        json={"status": "maintenance", "notes": "Broken rail"},
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "maintenance"

    resp = await _admit(async_client, api_base, ward)
    assert resp.status_code == 409

    resp = await async_client.patch(
        f"{api_base}/beds/{ward['bed_id']}/status",
        headers=ward["headers"],
        json={"status": "occupied"},
    )
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_nurse_assignments_retired_on_discharge(
    async_client: AsyncClient, api_base: str, ward: dict, unique_suffix: str
):
    resp = await async_client.post(
        f"{api_base}/staff/nurses",
        headers=ward["headers"],
        json={
            "email": f"nurse_{unique_suffix}@test.example.com",
            "password": "NursePass123!",
            "first_name": "Florence",
            "last_name": "N",
            "department_id": ward["department_id"],
            "shift": "night",
        },
    )
    assert resp.status_code == 201, resp.text
    nurse_id = resp.json()["data"]["id"]

    admission = (await _admit(async_client, api_base, ward)).json()["data"]

    resp = await async_client.post(
        f"{api_base}/nurses/{nurse_id}/assignments",
        headers=ward["headers"],
        json={"patient_id": ward["patient_id"]},
    )
    assert resp.status_code == 201
    assert resp.json()["data"]["bed_number"] == f"B-{unique_suffix}"

    resp = await async_client.post(
        f"{api_base}/nurses/{nurse_id}/assignments",
        headers=ward["headers"],
        json={"patient_id": ward["patient_id"]},
    )
    assert resp.status_code == 409

    await async_client.post(f"{api_base}/admissions/{admission['id']}/discharge", headers=ward["headers"])

    resp = await async_client.get(f"{api_base}/nurses/{nurse_id}/assignments", headers=ward["headers"])
    assert resp.json()["data"] == []
    resp = await async_client.get(
        f"{api_base}/nurses/{nurse_id}/assignments",
        headers=ward["headers"],
        params={"active_only": "false"},
    )
    assert [a["status"] for a in resp.json()["data"]] == ["discharged"]
