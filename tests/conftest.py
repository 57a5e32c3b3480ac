from types import SimpleNamespace

import pytest
from botocore.exceptions import ClientError

from fire_inspection.app import InspectionApp
from fire_inspection.io.storage_client import StorageClient
from fire_inspection.models.geometry import ContainerSize
from fire_inspection.services.auth import AuthService
from fire_inspection.services.report_generator import ReportGenerator
from fire_inspection.services.vehicles import VehicleRepository
from fire_inspection.session import InspectionSession


def _client_error(operation: str) -> ClientError:
    return ClientError({"Error": {"Code": "500", "Message": "boom"}}, operation)


class FakeQuery:
    """Minimal PostgREST query builder over in-memory rows."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload = None
        self.filters: list[tuple[str, object]] = []
        self.order_by: str | None = None
        self.limit_to: int | None = None

    def select(self, columns="*"):
        self.op = "select"
        return self

    def insert(self, row):
        self.op = "insert"
        self.payload = row
        return self

    def update(self, row):
        self.op = "update"
        self.payload = row
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column):
        self.order_by = column
        return self

    def limit(self, count):
        self.limit_to = count
        return self

    def _matches(self, row):
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self):
        self.db.calls.append((self.table, self.op, self.payload, list(self.filters)))
        if (self.table, self.op) in self.db.failing:
            raise RuntimeError(f"{self.op} on {self.table} failed")

        rows = self.db.tables.setdefault(self.table, [])
        if self.op == "insert":
            row = {"id": self.db.next_id(), "created_at": "2024-05-01T08:00:00", **self.payload}
            rows.append(row)
            return SimpleNamespace(data=[dict(row)])
        if self.op == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    updated.append(dict(row))
            return SimpleNamespace(data=updated)
        if self.op == "delete":
            removed = [row for row in rows if self._matches(row)]
            self.db.tables[self.table] = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=removed)

        selected = [dict(row) for row in rows if self._matches(row)]
        if self.order_by:
            selected.sort(key=lambda row: row[self.order_by])
        if self.limit_to is not None:
            selected = selected[: self.limit_to]
        return SimpleNamespace(data=selected)


class FakeAuth:
    def __init__(self, users: dict[str, tuple[str, str]]):
        self.users = users
        self.signed_out = 0
        self.fail_sign_out = False

    def sign_in_with_password(self, credentials):
        entry = self.users.get(credentials["email"])
        if entry is None or entry[1] != credentials["password"]:
            raise RuntimeError("Invalid login credentials")
        user = SimpleNamespace(id=entry[0], email=credentials["email"])
        return SimpleNamespace(user=user, session=SimpleNamespace(access_token="token-123"))

    def sign_out(self):
        self.signed_out += 1
        if self.fail_sign_out:
            raise RuntimeError("network down")


class FakeSupabase:
    def __init__(self):
        self.tables: dict[str, list[dict]] = {}
        self.calls: list[tuple] = []
        self.failing: set[tuple[str, str]] = set()
        self.auth = FakeAuth({"chef@sdis.fr": ("user-1", "secret")})
        self._id = 0

    def next_id(self) -> int:
        self._id += 1
        return self._id

    def table(self, name):
        return FakeQuery(self, name)

    def seed(self, table, rows):
        for row in rows:
            self.tables.setdefault(table, []).append(dict(row))
            self._id = max(self._id, row.get("id", 0))


class FakeS3:
    """Records storage calls; failures are switched on per operation."""

    def __init__(self):
        self.objects: dict[tuple[str, str], bytes] = {}
        self.deleted: list[list[str]] = []
        self.uploaded_files: list[tuple[str, str]] = []
        self.fail: set[str] = set()
        self.fail_keys: set[str] = set()

    def put_object(self, Bucket, Key, Body, ContentType):
        if "put_object" in self.fail or Key in self.fail_keys:
            raise _client_error("PutObject")
        self.objects[(Bucket, Key)] = Body

    def delete_objects(self, Bucket, Delete):
        if "delete_objects" in self.fail:
            raise _client_error("DeleteObjects")
        keys = [obj["Key"] for obj in Delete["Objects"]]
        self.deleted.append(keys)
        for key in keys:
            self.objects.pop((Bucket, key), None)
        return {"Deleted": [{"Key": key} for key in keys]}

    def download_file(self, Bucket, Key, Filename):
        if "download_file" in self.fail or (Bucket, Key) not in self.objects:
            raise _client_error("GetObject")
        with open(Filename, "wb") as f:
            f.write(self.objects[(Bucket, Key)])

    def upload_file(self, Filename, Bucket, Key):
        if "upload_file" in self.fail:
            raise _client_error("PutObject")
        self.uploaded_files.append((Bucket, Key))


class FakeModels:
    def __init__(self, text="# Rapport d'Inspection du Véhicule", error: Exception | None = None):
        self.text = text
        self.error = error
        self.prompts: list[str] = []

    def generate_content(self, model, contents):
        self.prompts.append(contents)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


class FakeGenaiClient:
    def __init__(self, **kwargs):
        self.models = FakeModels(**kwargs)


@pytest.fixture
def supabase():
    db = FakeSupabase()
    db.seed(
        "user_profile",
        [
            {
                "id": 1,
                "user_id": "user-1",
                "name": "Jean Dupont",
                "rank": "Sergent",
                "matricule": "M-042",
                "caserne": "Caserne Centrale",
                "avatar_url": None,
            }
        ],
    )
    db.seed(
        "vehicles",
        [
            {
                "id": 10,
                "name": "VSAV 1",
                "caserne": "Caserne Centrale",
                "image_avant_path": "Caserne_Centrale/VSAV_1-avant-1",
                "image_droite_path": None,
                "image_arriere_path": None,
                "image_gauche_path": "Caserne_Centrale/VSAV_1-gauche-1",
            },
            {
                "id": 11,
                "name": "FPT 2",
                "caserne": "Caserne Centrale",
                "image_avant_path": None,
                "image_droite_path": None,
                "image_arriere_path": None,
                "image_gauche_path": None,
            },
            {
                "id": 12,
                "name": "CCF 3",
                "caserne": "Caserne Nord",
                "image_avant_path": None,
                "image_droite_path": None,
                "image_arriere_path": None,
                "image_gauche_path": None,
            },
        ],
    )
    return db


@pytest.fixture
def s3():
    return FakeS3()


@pytest.fixture
def storage(s3):
    return StorageClient(bucket="vehicle_images", public_base_url="https://proj.supabase.co", s3_client=s3)


@pytest.fixture
def repository(supabase, storage):
    return VehicleRepository(supabase, storage, clock=lambda: 1700000000000)


@pytest.fixture
def make_genai_client():
    return FakeGenaiClient


@pytest.fixture
def genai_client():
    return FakeGenaiClient()


@pytest.fixture
def app(supabase, repository, genai_client):
    counter = iter(range(1, 1000))
    session = InspectionSession(id_factory=lambda: f"defect-{next(counter)}")
    return InspectionApp(
        auth=AuthService(supabase),
        vehicles=repository,
        reports=ReportGenerator(api_key="test-key", client=genai_client),
        session=session,
    )


@pytest.fixture
def signed_in_app(app):
    result = app.sign_in("chef@sdis.fr", "secret")
    assert result.ok
    return app


@pytest.fixture
def container():
    return ContainerSize(width=800, height=600)
