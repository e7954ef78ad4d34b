import unittest
from unittest.mock import MagicMock, patch

from portal import dependencies
from portal.db import InMemoryDocumentStore
from scripts import cleanup_items, force_approve, seed_vault


class InMemoryStoreCheckTests(unittest.TestCase):
    def test_detects_in_memory_store(self):
        with patch.object(dependencies, "_document_store", InMemoryDocumentStore()):
            self.assertTrue(dependencies.uses_in_memory_store())
        with patch.object(dependencies, "_document_store", MagicMock()):
            self.assertFalse(dependencies.uses_in_memory_store())


class OperatorScriptTests(unittest.TestCase):
    def run_script(self, module, argv, in_memory):
        with patch.object(module.sys, "argv", ["script", *argv]), patch.object(
            module, "uses_in_memory_store", return_value=in_memory
        ), patch.object(module, "get_repository") as get_repository:
            with self.assertLogs(module.logger, level="INFO") as logs:
                code = module.main()
        return code, get_repository, logs.output

    def test_scripts_refuse_in_memory_store(self):
        cases = [
            (cleanup_items, ["--title", "Doom"]),
            (force_approve, ["--email", "admin@heroportal.io"]),
            (seed_vault, []),
        ]
        for module, argv in cases:
            with self.subTest(script=module.__name__):
                code, get_repository, output = self.run_script(module, argv, True)
                self.assertEqual(code, 1)
                get_repository.assert_not_called()
                self.assertIn("No document store configured", output[0])

    def test_cleanup_runs_against_configured_store(self):
        code, get_repository, output = self.run_script(
            cleanup_items, ["--title", "Doom", "--dry-run"], False
        )
        self.assertEqual(code, 0)
        get_repository.return_value.find_items_by_title.assert_called_once_with("Doom")
        self.assertIn('Found 0 items titled "Doom"', output[0])


if __name__ == "__main__":
    unittest.main()
