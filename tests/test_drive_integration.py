import io
import os
import unittest

from onedrivemgr import APP_ROOT, ConflictBehavior, DriveConfig, OneDriveClient


def _enabled() -> bool:
    return bool(
        os.environ.get("ONEDRIVEMGR_CLIENT_ID", "").strip()
        and os.environ.get("ONEDRIVEMGR_RUN_INTEGRATION", "").strip() == "1"
    )


@unittest.skipUnless(_enabled(), "live OneDrive integration test disabled")
class TestOneDriveIntegration(unittest.TestCase):
    """
    Integration test with a real OneDrive account (app folder only).

    Required env vars:
        - ONEDRIVEMGR_CLIENT_ID / ONEDRIVEMGR_CLIENT_SECRET
        - ONEDRIVEMGR_RUN_INTEGRATION=1

    Optional:
        - ONEDRIVEMGR_TOKEN_FILE: keep the account between runs (otherwise a
          browser sign-in happens on every run)
    """

    @classmethod
    def setUpClass(cls) -> None:
        cls.client = OneDriveClient(DriveConfig.from_env())

    def test_folder_and_file_smoke(self) -> None:
        client = self.client
        self.assertTrue(client.app_root_exists())

        name = "onedrivemgr_it_tmp"
        created = client.create_folder(name, ConflictBehavior.FAIL, root=APP_ROOT)
        self.assertTrue(created.ok, created)
        try:
            again = client.create_folder(name, ConflictBehavior.FAIL, root=APP_ROOT)
            self.assertTrue(again.is_conflict, again)

            payload = b"hello from onedrivemgr"
            uploaded = client.upload_file(f"{name}/hello.txt", io.BytesIO(payload), root=APP_ROOT)
            self.assertTrue(uploaded.ok, uploaded)

            fetched = client.get_file(f"{name}/hello.txt", root=APP_ROOT)
            self.assertEqual(fetched.unwrap().size, len(payload))

            renamed = client.rename_file(fetched.value.id, "it's renamed.txt")
            self.assertTrue(renamed.ok, renamed)
            self.assertTrue(client.get_file(f"{name}/it's renamed.txt", root=APP_ROOT).ok)
        finally:
            folder = client.get_folder(name, root=APP_ROOT)
            if folder.ok:
                client.delete_folder(folder.value.id)

        self.assertTrue(client.get_folder(name, root=APP_ROOT).is_not_found)


if __name__ == "__main__":
    unittest.main()
