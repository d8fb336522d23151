"""Tests for land, village statistics, documents and citizen records."""

from datetime import date, timedelta

from conftest import (
    ADMIN_AADHAR, CITIZEN_AADHAR, EMPLOYEE_AADHAR, MONITOR_AADHAR, OTHER_CITIZEN_AADHAR, PASSWORD,
)
from db.models import Citizen, Login, Tax


class TestAgriculture:

    def add_record(self, client, headers, **owner):
        body = {"land_area": 2.5, "crop_type": "Paddy", "valuation": 350000, "yield": 40}
        body.update(owner or {"owner_aadhar": CITIZEN_AADHAR})
        return client.post("/api/employees/addagri", headers=headers, json=body)

    def test_add_record_by_aadhar(self, client, employee_headers, citizen_headers):
        resp = self.add_record(client, employee_headers)

        assert resp.status_code == 200
        land = client.get("/api/citizens/me/agriculture", headers=citizen_headers).json()
        assert len(land) == 1
        assert land[0]["crop_type"] == "Paddy"
        assert land[0]["yield"] == 40

    def test_add_record_by_name(self, client, employee_headers, citizen_headers):
        resp = self.add_record(client, employee_headers, owner_name="Kiran Farmer")

        assert resp.status_code == 200
        assert len(client.get("/api/citizens/me/agriculture", headers=citizen_headers).json()) == 1

    def test_unknown_owner(self, client, employee_headers):
        resp = self.add_record(client, employee_headers, owner_name="Nobody")

        assert resp.status_code == 404

    def test_owner_required(self, client, employee_headers):
        resp = client.post("/api/employees/addagri", headers=employee_headers, json={
            "land_area": 1, "crop_type": "Wheat", "valuation": 1, "yield": 1,
        })

        assert resp.status_code == 400

    def test_owner_updates_record(self, client, employee_headers, citizen_headers):
        record_id = self.add_record(client, employee_headers).json()["record_id"]

        resp = client.post("/api/citizens/updateagri", headers=citizen_headers, json={
            "record_id": record_id, "land_area": 3, "crop_type": "Sugarcane",
            "valuation": 400000, "_yield": 55,
        })

        assert resp.status_code == 200
        land = client.get("/api/citizens/me/agriculture", headers=citizen_headers).json()
        assert land[0]["crop_type"] == "Sugarcane"
        assert land[0]["yield"] == 55

    def test_non_owner_cannot_update(self, client, employee_headers, citizen_headers, other_citizen_headers):
        record_id = self.add_record(client, employee_headers).json()["record_id"]

        resp = client.post("/api/citizens/updateagri", headers=other_citizen_headers, json={
            "record_id": record_id, "land_area": 3, "crop_type": "Sugarcane",
            "valuation": 1, "yield": 1,
        })

        assert resp.status_code == 404

    def test_employee_sees_all_land(self, client, employee_headers, citizen_headers):
        self.add_record(client, employee_headers)

        assert len(client.get("/api/employees/agriculture", headers=employee_headers).json()) == 1


class TestVillageStatistics:

    CENSUS = {
        "year": 2021, "total_population": 5000, "male_population": 2550,
        "female_population": 2450, "literacy_rate": 72.5, "birth_rate": 18.1, "death_rate": 6.9,
    }

    def test_census_visible_to_every_role(self, client, employee_headers, citizen_headers, monitor_headers):
        resp = client.post("/api/employees/addcensus", headers=employee_headers, json=self.CENSUS)

        assert resp.status_code == 200
        for headers in (citizen_headers, monitor_headers, employee_headers):
            rows = client.get("/api/records/census", headers=headers).json()
            assert [r["year"] for r in rows] == [2021]
        assert rows[0]["member_id"] is not None

    def test_census_population_must_add_up(self, client, employee_headers):
        body = {**self.CENSUS, "male_population": 4000, "female_population": 2000}

        assert client.post("/api/employees/addcensus", headers=employee_headers, json=body).status_code == 400

    def test_census_ordered_by_year(self, client, employee_headers):
        for year in (2021, 2011):
            client.post("/api/employees/addcensus", headers=employee_headers, json={**self.CENSUS, "year": year})

        rows = client.get("/api/records/census", headers=employee_headers).json()

        assert [r["year"] for r in rows] == [2011, 2021]

    def test_environmental_data(self, client, employee_headers, citizen_headers):
        resp = client.post("/api/employees/addenvdata", headers=employee_headers, json={
            "year": 2024, "air_quality_index": 88, "water_quality_index": 71,
            "rainfall": 1100, "forest_cover": 22.5,
        })

        assert resp.status_code == 200
        assert client.get("/api/records/environment", headers=citizen_headers).json()[0]["rainfall"] == 1100

    def test_assets(self, client, employee_headers, citizen_headers):
        resp = client.post("/api/employees/addasset", headers=employee_headers, json={
            "asset_name": "Hand pump", "quantity": 12, "locality": "Ward 3",
            "installation_year": 2019, "amount_spent": 240000,
        })

        assert resp.status_code == 200
        assets = client.get("/api/records/assets", headers=citizen_headers).json()
        assert assets[0]["asset_name"] == "Hand pump"

    def test_monitor_cannot_record(self, client, monitor_headers):
        assert client.post("/api/employees/addcensus", headers=monitor_headers, json=self.CENSUS).status_code == 403

    def test_statistics_require_sign_in(self, client):
        assert client.get("/api/records/census").status_code == 401


class TestCertificates:

    def add(self, client, headers, **overrides):
        body = {
            "certificate_type": "Residence Certificate",
            "issue_date": "2024-01-10",
            "validity_period": (date.today() + timedelta(days=365)).isoformat(),
        }
        body.update(overrides)
        return client.post("/api/citizens/addcertificate", headers=headers, json=body)

    def test_add_and_list(self, client, citizen_headers):
        assert self.add(client, citizen_headers).status_code == 200
        assert self.add(client, citizen_headers, certificate_type="Birth Certificate",
                        issue_date="1990-05-01", validity_period="2000-05-01").status_code == 200

        certs = client.get("/api/citizens/me/certificates", headers=citizen_headers).json()

        statuses = {c["certificate_type"]: c["status"] for c in certs}
        assert statuses == {"Residence Certificate": "Valid", "Birth Certificate": "Expired"}

    def test_unknown_type(self, client, citizen_headers):
        assert self.add(client, citizen_headers, certificate_type="Fishing Licence").status_code == 400

    def test_validity_before_issue(self, client, citizen_headers):
        resp = self.add(client, citizen_headers, issue_date="2024-01-10", validity_period="2023-01-10")

        assert resp.status_code == 400

    def test_cannot_add_for_someone_else(self, client, citizen_headers):
        resp = self.add(client, citizen_headers, citizen_id=987654)

        assert resp.status_code == 401
        assert resp.json() == {"error": "Unauthorized"}


class TestVaccinations:

    def test_employee_records_dose(self, client, employee_headers, citizen_headers, other_citizen_headers):
        resp = client.post("/api/employees/addvaccination", headers=employee_headers, json={
            "vaccine_type": "Polio", "date_administered": "2024-02-01",
            "dose_number": 2, "citizen_aadhar": CITIZEN_AADHAR,
        })

        assert resp.status_code == 200
        mine = client.get("/api/citizens/me/vaccinations", headers=citizen_headers).json()
        assert mine[0]["citizen_aadhar"] == CITIZEN_AADHAR
        assert mine[0]["dose_number"] == 2
        assert client.get("/api/citizens/me/vaccinations", headers=other_citizen_headers).json() == []
        assert len(client.get("/api/employees/vaccinations", headers=employee_headers).json()) == 1

    def test_unknown_recipient(self, client, employee_headers):
        resp = client.post("/api/employees/addvaccination", headers=employee_headers, json={
            "vaccine_type": "Polio", "date_administered": "2024-02-01",
            "dose_number": 1, "citizen_aadhar": "999999999999",
        })

        assert resp.status_code == 404


class TestDirectory:

    def test_staff_listings(self, client, employee_headers, monitor_headers, citizen_headers):
        citizens = client.get("/api/records/citizens", headers=monitor_headers).json()
        employees = client.get("/api/records/employees", headers=monitor_headers).json()
        monitors = client.get("/api/records/monitors", headers=employee_headers).json()

        assert CITIZEN_AADHAR in {c["aadhar_id"] for c in citizens}
        assert [e["aadhar_id"] for e in employees] == [EMPLOYEE_AADHAR]
        assert employees[0]["salary"] == 25000
        assert [m["aadhar_id"] for m in monitors] == [MONITOR_AADHAR]

    def test_citizen_cannot_list_citizens(self, client, citizen_headers):
        assert client.get("/api/records/citizens", headers=citizen_headers).status_code == 403

    def test_citizen_profile(self, client, citizen_headers):
        me = client.get("/api/records/me", headers=citizen_headers).json()

        assert me["role"] == "citizen"
        assert me["name"] == "Kiran Farmer"


class TestCitizenEdits:

    def test_citizen_edits_self(self, client, citizen_headers):
        resp = client.post("/api/citizens/update", headers=citizen_headers, json={
            "aadhar_id": CITIZEN_AADHAR, "name": "Kiran Kumar", "age": 36,
        })

        assert resp.status_code == 200
        me = client.get("/api/records/me", headers=citizen_headers).json()
        assert me["name"] == "Kiran Kumar"
        assert me["age"] == 36
        assert me["gender"] == "female"

    def test_citizen_cannot_edit_others(self, client, citizen_headers, other_citizen_headers):
        resp = client.post("/api/citizens/update", headers=citizen_headers, json={
            "aadhar_id": OTHER_CITIZEN_AADHAR, "name": "Changed",
        })

        assert resp.status_code == 403

    def test_employee_edits_citizen(self, client, employee_headers, citizen_headers):
        resp = client.post("/api/citizens/update", headers=employee_headers, json={
            "aadhar_id": CITIZEN_AADHAR, "contact_number": "9000000000",
        })

        assert resp.status_code == 200

    def test_occupation_cannot_change_role(self, client, citizen_headers):
        resp = client.post("/api/citizens/update", headers=citizen_headers, json={
            "aadhar_id": CITIZEN_AADHAR, "occupation": "System Administrator",
        })

        assert resp.status_code == 400
        assert client.get("/api/auth/session", headers=citizen_headers).json()["user"]["role"] == "citizen"

    def test_monitor_salary_update(self, client, employee_headers, monitor_headers):
        resp = client.post("/api/monitors/update", headers=employee_headers, json={
            "aadhar_id": MONITOR_AADHAR, "name": "Meena Monitor", "contact_number": "9876543210",
            "educational_qualification": "graduate", "salary": 32000,
        })

        assert resp.status_code == 200
        assert client.get("/api/records/me", headers=monitor_headers).json()["salary"] == 32000

    def test_staff_update_requires_staff_row(self, client, employee_headers, citizen_headers):
        resp = client.post("/api/monitors/update", headers=employee_headers, json={
            "aadhar_id": CITIZEN_AADHAR, "name": "Kiran Farmer", "contact_number": "9876543210",
            "educational_qualification": "graduate", "salary": 1,
        })

        assert resp.status_code == 404

    def test_employee_update_by_admin(self, client, admin_headers, employee_headers):
        resp = client.post("/api/employees/update", headers=admin_headers, json={
            "aadhar_id": EMPLOYEE_AADHAR, "name": "Ravi Employee", "contact_number": "9876543210",
            "educational_qualification": "post_graduate", "salary": 28000, "position": "Accountant",
        })

        assert resp.status_code == 200
        me = client.get("/api/records/me", headers=employee_headers).json()
        assert me["position"] == "Accountant"
        assert me["salary"] == 28000


class TestCitizenDeletion:

    def test_employee_deletes_citizen(self, client, employee_headers, citizen_headers, count_rows):
        client.post("/api/employees/allocatetax", headers=employee_headers, json={
            "tax_type": "Water Tax", "amount": 300, "aadhar_id": CITIZEN_AADHAR, "due_date": "2030-01-01",
        })
        citizens_before = count_rows(Citizen)

        resp = client.post("/api/citizens/delete", headers=employee_headers, json={"aadhar_id": CITIZEN_AADHAR})

        assert resp.status_code == 200
        assert count_rows(Citizen) == citizens_before - 1
        assert count_rows(Tax) == 0
        signin = client.post("/api/auth/signin", json={"username": CITIZEN_AADHAR, "password": PASSWORD})
        assert signin.status_code == 401
        assert client.get("/api/auth/session", headers=citizen_headers).status_code == 401

    def test_deleting_employee_keeps_their_statistics(self, client, admin_headers, employee_headers, count_rows):
        client.post("/api/employees/addcensus", headers=employee_headers,
                    json=TestVillageStatistics.CENSUS)

        resp = client.post("/api/citizens/delete", headers=admin_headers, json={"aadhar_id": EMPLOYEE_AADHAR})

        assert resp.status_code == 200
        rows = client.get("/api/records/census", headers=admin_headers).json()
        assert len(rows) == 1
        assert rows[0]["member_id"] is None
        assert count_rows(Login) == 1

    def test_citizen_cannot_delete(self, client, citizen_headers, other_citizen_headers):
        resp = client.post("/api/citizens/delete", headers=citizen_headers,
                           json={"aadhar_id": OTHER_CITIZEN_AADHAR})

        assert resp.status_code == 403

    def test_employee_cannot_delete_admin(self, client, employee_headers):
        resp = client.post("/api/citizens/delete", headers=employee_headers, json={"aadhar_id": ADMIN_AADHAR})

        assert resp.status_code == 403

    def test_cannot_delete_self(self, client, employee_headers):
        resp = client.post("/api/citizens/delete", headers=employee_headers, json={"aadhar_id": EMPLOYEE_AADHAR})

        assert resp.status_code == 400

    def test_unknown_citizen(self, client, employee_headers):
        resp = client.post("/api/citizens/delete", headers=employee_headers, json={"aadhar_id": "999999999999"})

        assert resp.status_code == 404
