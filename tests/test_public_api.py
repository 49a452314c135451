import unittest

import shapir


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(shapir, "Connection"))
        self.assertTrue(hasattr(shapir, "ConnectionBuilder"))
        self.assertTrue(hasattr(shapir, "Authenticator"))

        self.assertTrue(hasattr(shapir, "Items"))
        self.assertTrue(hasattr(shapir, "Shares"))
        self.assertTrue(hasattr(shapir, "Users"))
        self.assertTrue(hasattr(shapir, "Path"))
        self.assertTrue(hasattr(shapir, "ShareConfig"))
        self.assertTrue(hasattr(shapir, "UserId"))

        self.assertTrue(hasattr(shapir, "ShapirError"))
        self.assertTrue(hasattr(shapir, "NotFoundError"))

    def test___all___is_defined(self) -> None:
        self.assertTrue(hasattr(shapir, "__all__"))
        self.assertIn("Connection", shapir.__all__)
        self.assertIn("ShapirError", shapir.__all__)
        for name in shapir.__all__:
            self.assertTrue(hasattr(shapir, name), name)

    def test_builder_entry_point(self) -> None:
        self.assertIsInstance(shapir.Connection.new(), shapir.ConnectionBuilder)


if __name__ == "__main__":
    unittest.main()
