import unittest
from sheet_processor.utils.access_gate import authorize, require, Action, Caller, Decision
from sheet_processor.utils.exceptions import Forbidden

class TestAccessGate(unittest.TestCase):
    def setUp(self):
        self.user = Caller(1, 'user')
        self.admin = Caller(2, 'admin')
        self.guest = Caller(3, 'guest')

    def test_owner_may_do_everything_on_own_resources(self):
        for action in Action:
            self.assertEqual(authorize(self.user, action, 1), Decision.ALLOWED)
            self.assertEqual(authorize(self.admin, action, 2), Decision.ALLOWED)

    def test_user_may_not_act_on_other_owners(self):
        for action in Action:
            self.assertEqual(authorize(self.user, action, 2), Decision.DENIED)

    def test_admin_may_only_view_dashboard_across_owners(self):
        self.assertEqual(authorize(self.admin, Action.DASHBOARD_VIEW, 1), Decision.ALLOWED)
        for action in [Action.DELETE, Action.LIST_HISTORY, Action.VIEW, Action.PROJECT, Action.UPLOAD]:
            self.assertEqual(authorize(self.admin, action, 1), Decision.DENIED)

    def test_unknown_roles_are_denied(self):
        for action in Action:
            self.assertEqual(authorize(self.guest, action, 3), Decision.DENIED)
            self.assertEqual(authorize(self.guest, action), Decision.DENIED)
        self.assertEqual(authorize(None, Action.UPLOAD), Decision.DENIED)

    def test_actions_without_resource_are_allowed_for_known_roles(self):
        self.assertEqual(authorize(self.user, Action.UPLOAD), Decision.ALLOWED)
        self.assertEqual(authorize(self.admin, Action.DASHBOARD_VIEW), Decision.ALLOWED)

    def test_require_raises_forbidden(self):
        require(self.user, Action.UPLOAD)
        with self.assertRaises(Forbidden):
            require(self.user, Action.DELETE, 2)

if __name__ == '__main__':
    unittest.main()
