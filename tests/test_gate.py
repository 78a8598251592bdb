import unittest

from birthdaybox.session.gate import LoginResult, SessionGate, StaticPassphrase, gate_from_config


class SessionGateTests(unittest.TestCase):
    def setUp(self) -> None:
        self.gate = SessionGate(StaticPassphrase("2025"), "wrong password")

    def test_starts_unauthenticated(self) -> None:
        self.assertFalse(self.gate.authenticated)
        self.assertEqual(self.gate.state.error, "")

    def test_exact_secret_succeeds(self) -> None:
        self.gate.state.error = "stale"
        self.assertIs(self.gate.attempt_login("2025"), LoginResult.SUCCESS)
        self.assertTrue(self.gate.authenticated)
        self.assertEqual(self.gate.state.error, "")

    def test_anything_else_fails_and_clears_input(self) -> None:
        for candidate in ["", "2024", " 2025", "2025 ", "２０２５", "20250"]:
            self.gate.state.password_input = candidate
            self.assertIs(self.gate.attempt_login(candidate), LoginResult.FAILURE)
            self.assertFalse(self.gate.authenticated)
            self.assertEqual(self.gate.state.error, "wrong password")
            self.assertEqual(self.gate.state.password_input, "")

    def test_comparison_is_case_sensitive(self) -> None:
        gate = SessionGate(StaticPassphrase("Cake"))
        self.assertIs(gate.attempt_login("cake"), LoginResult.FAILURE)
        self.assertIs(gate.attempt_login("Cake"), LoginResult.SUCCESS)

    def test_no_lockout_after_failures(self) -> None:
        for _ in range(10):
            self.gate.attempt_login("nope")
        self.assertIs(self.gate.attempt_login("2025"), LoginResult.SUCCESS)

    def test_gate_from_config_uses_secret_and_message(self) -> None:
        gate = gate_from_config({"gate": {"secret": "abc", "error_message": "no"}})
        self.assertIs(gate.attempt_login("x"), LoginResult.FAILURE)
        self.assertEqual(gate.state.error, "no")
        self.assertIs(gate.attempt_login("abc"), LoginResult.SUCCESS)


if __name__ == "__main__":
    unittest.main()
