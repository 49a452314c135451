import argparse
import os
import tempfile
import unittest
import uuid

from shapir import Connection, Path, ShareConfig, ShareKind, settings_from_env


class TestShareFileIntegration(unittest.TestCase):
    """
    Integration test with a real ShareFile account.

    Required env vars:
        - SHAPIR_SUBDOMAIN, SHAPIR_USERNAME, SHAPIR_PASSWORD
        - SHAPIR_CLIENT_ID, SHAPIR_CLIENT_SECRET
        - SHAPIR_TEST_ROOT_ID: folder id used as test root (safe sandbox)

    The test is skipped when any of them is missing.
    """

    @classmethod
    def setUpClass(cls) -> None:
        cls.settings = settings_from_env()
        cls.root_id = os.environ.get("SHAPIR_TEST_ROOT_ID", "").strip()
        missing = [
            name
            for name in ("subdomain", "username", "password", "client_id", "client_secret")
            if getattr(cls.settings, name) is None
        ]
        if missing or not cls.root_id:
            raise unittest.SkipTest("ShareFile credentials are not configured")

    def setUp(self) -> None:
        self.conn = Connection.configured(self.settings).connect()
        self.addCleanup(self.conn.close)

    def test_folder_file_share_smoke(self) -> None:
        items = self.conn.items()
        root = Path.by_id(self.root_id)

        # 1) work folder
        folder = items.mkdir(root, f"shapir_it_{uuid.uuid4().hex[:8]}")
        folder_path = Path.by_id(folder.id)
        self.addCleanup(items.remove, folder_path)

        # 2) upload in several chunks, then read it back
        payload = os.urandom(40 * 1024 + 7)
        items.upload(folder_path, "hello.bin", payload, chunk_size=16 * 1024)

        uploaded = items.stat(Path.relative(folder.id, "hello.bin"))
        self.assertIsNotNone(uploaded)
        self.assertEqual(uploaded.size, len(payload))
        self.assertEqual(items.download(Path.by_id(uploaded.id)), payload)

        with tempfile.TemporaryDirectory() as tmp:
            target = os.path.join(tmp, "hello.bin")
            items.download_file(Path.by_id(uploaded.id), target)
            with open(target, "rb") as f:
                self.assertEqual(f.read(), payload)

        # 3) listing and missing items
        names = [i.name for i in items.list(folder_path)]
        self.assertIn("hello.bin", names)
        self.assertIsNone(items.stat(Path.relative(folder.id, "does-not-exist.bin")))

        # 4) share
        share = self.conn.shares().create(
            ShareConfig(kind=ShareKind.SEND, title="shapir it", items=[uploaded.id])
        )
        self.assertTrue(share.id)

        # 5) bulk delete
        items.remove_bulk([Path.by_id(uploaded.id)])
        self.assertIsNone(items.stat(Path.relative(folder.id, "hello.bin")))


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose unittest output",
    )
    return parser.parse_args()


if __name__ == "__main__":
    args = _parse_args()
    unittest.main(verbosity=2 if args.verbose else 1)
