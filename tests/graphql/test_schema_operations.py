"""
Query and mutation tests executed against the federated schema
"""

import uuid

import pytest

from medications.graphql.loaders import Loaders
from medications.graphql.schema import schema

PRESCRIPTION_FIELDS = """
    id
    memberId
    providerId
    medicationName
    dosage
    frequency
    startDate
    endDate
    pharmacy
    refillsRemaining
    status
    notes
"""

CREATE = f"""
mutation Create($input: CreatePrescriptionInput!) {{
  createPrescription(input: $input) {{ {PRESCRIPTION_FIELDS} }}
}}
"""

REFILL = """
mutation Refill($id: ID!, $n: Int!) {
  refillPrescription(input: {prescriptionId: $id, additionalRefills: $n}) {
    id
    refillsRemaining
    status
  }
}
"""

CANCEL = """
mutation Cancel($id: ID!) {
  cancelPrescription(id: $id) { id status refillsRemaining medicationName }
}
"""

COMPLETE = """
mutation Complete($id: ID!) {
  completePrescription(id: $id) { id status refillsRemaining }
}
"""

GET_ONE = f"""
query Get($id: ID!) {{
  prescription(id: $id) {{ {PRESCRIPTION_FIELDS} }}
}}
"""


async def execute(query: str, **variables):
    return await schema.execute(
        query,
        variable_values=variables or None,
        context_value={"request": None, "loaders": Loaders()},
    )


class TestCreateRefillCompleteFlow:
    @pytest.mark.asyncio
    async def test_end_to_end(self, store):
        member_id = str(uuid.uuid4())
        provider_id = str(uuid.uuid4())

        created = await execute(
            CREATE,
            input={
                "memberId": member_id,
                "providerId": provider_id,
                "medicationName": "Ibuprofen",
                "dosage": "200mg",
                "frequency": "daily",
                "startDate": "2024-01-01",
            },
        )
        assert created.errors is None
        prescription = created.data["createPrescription"]
        assert prescription["status"] == "ACTIVE"
        assert prescription["refillsRemaining"] == 3
        assert prescription["memberId"] == member_id
        assert prescription["providerId"] == provider_id
        assert prescription["startDate"] == "2024-01-01"
        assert prescription["endDate"] is None
        assert prescription["pharmacy"] is None

        refilled = await execute(REFILL, id=prescription["id"], n=2)
        assert refilled.errors is None
        assert refilled.data["refillPrescription"]["refillsRemaining"] == 5

        completed = await execute(COMPLETE, id=prescription["id"])
        assert completed.errors is None
        assert completed.data["completePrescription"] == {
            "id": prescription["id"],
            "status": "COMPLETED",
            "refillsRemaining": 0,
        }

        fetched = await execute(GET_ONE, id=prescription["id"])
        assert fetched.data["prescription"]["status"] == "COMPLETED"

    @pytest.mark.asyncio
    async def test_create_rejects_status_and_refills_fields(self, store):
        result = await execute(
            """
            mutation {
              createPrescription(input: {
                memberId: "%s", providerId: "%s",
                medicationName: "Ibuprofen", dosage: "200mg", frequency: "daily",
                startDate: "2024-01-01", status: CANCELLED, refillsRemaining: 10
              }) { id }
            }
            """
            % (uuid.uuid4(), uuid.uuid4())
        )

        assert result.errors
        assert store.rows == {}

    @pytest.mark.asyncio
    async def test_create_rejects_malformed_date(self, store):
        result = await execute(
            CREATE,
            input={
                "memberId": str(uuid.uuid4()),
                "providerId": str(uuid.uuid4()),
                "medicationName": "Ibuprofen",
                "dosage": "200mg",
                "frequency": "daily",
                "startDate": "01/01/2024",
            },
        )

        assert result.errors
        assert store.rows == {}


class TestAbsenceHandling:
    @pytest.mark.asyncio
    async def test_read_returns_null_for_unknown_id(self, store):
        result = await execute(GET_ONE, id=str(uuid.uuid4()))

        assert result.errors is None
        assert result.data == {"prescription": None}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mutation", [CANCEL, COMPLETE])
    async def test_writes_fail_for_unknown_id(self, store, mutation):
        missing = str(uuid.uuid4())

        result = await execute(mutation, id=missing)

        assert result.data is None
        assert result.errors[0].message == f"Prescription with ID {missing} not found"

    @pytest.mark.asyncio
    async def test_refill_fails_for_unknown_id(self, store):
        missing = str(uuid.uuid4())

        result = await execute(REFILL, id=missing, n=1)

        assert result.data is None
        assert result.errors[0].message == f"Prescription with ID {missing} not found"

    @pytest.mark.asyncio
    async def test_malformed_id_is_a_request_failure(self, store):
        result = await execute(GET_ONE, id="not-a-uuid")

        assert result.data == {"prescription": None}
        assert result.errors[0].message == "Invalid prescription ID: 'not-a-uuid'"


class TestStatusMutations:
    @pytest.mark.asyncio
    async def test_cancel_changes_only_status(self, store):
        row = store.add(refills_remaining=2)

        result = await execute(CANCEL, id=str(row.id))

        assert result.data["cancelPrescription"] == {
            "id": str(row.id),
            "status": "CANCELLED",
            "refillsRemaining": 2,
            "medicationName": "Lisinopril",
        }

    @pytest.mark.asyncio
    async def test_negative_refill_is_accepted(self, store):
        row = store.add(refills_remaining=1)

        result = await execute(REFILL, id=str(row.id), n=-3)

        assert result.errors is None
        assert result.data["refillPrescription"]["refillsRemaining"] == -2


class TestFilteredQueries:
    @pytest.mark.asyncio
    async def test_lists_by_member_provider_and_status(self, store):
        member_id = uuid.uuid4()
        provider_id = uuid.uuid4()
        mine = store.add(member_id=member_id, provider_id=provider_id)
        store.add(member_id=member_id, status="EXPIRED")
        store.add(status="CANCELLED")

        result = await execute(
            """
            query Lists($member: ID!, $provider: ID!) {
              all: prescriptions { id }
              byMember: prescriptionsByMember(memberId: $member) { id }
              byProvider: prescriptionsByProvider(providerId: $provider) { id }
              expired: prescriptionsByStatus(status: EXPIRED) { id memberId }
              completed: prescriptionsByStatus(status: COMPLETED) { id }
            }
            """,
            member=str(member_id),
            provider=str(provider_id),
        )

        assert result.errors is None
        assert len(result.data["all"]) == 3
        assert len(result.data["byMember"]) == 2
        assert result.data["byProvider"] == [{"id": str(mine.id)}]
        assert result.data["expired"][0]["memberId"] == str(member_id)
        assert result.data["completed"] == []

    @pytest.mark.asyncio
    async def test_unknown_status_is_rejected(self, store):
        result = await execute("{ prescriptionsByStatus(status: PENDING) { id } }")

        assert result.errors
