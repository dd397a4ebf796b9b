import json
import unittest

from app.services.filter_validation import InvalidFilterError, prepare_filter_for_save, validate_filter


def _valid_payload(**overrides):
    payload = {
        "name": "Police leadership",
        "category": "authority_title_filters",
        "criteria": {
            "conditions": [
                {"field": "title", "operator": "contains", "value": "chief"},
                {"field": "tier", "operator": "in", "value": ["A", "B"]},
            ],
            "logic": "or",
        },
    }
    payload.update(overrides)
    return payload


class ValidateFilterTests(unittest.TestCase):
    def test_valid_filter_gets_defaults(self):
        payload = _valid_payload()
        payload["criteria"].pop("logic")
        result = validate_filter(payload)
        self.assertTrue(result.success)
        self.assertIsNone(result.errors)
        self.assertEqual(result.data.criteria.logic, "and")
        self.assertTrue(result.data.is_active)
        self.assertIsNone(result.data.id)
        self.assertEqual(result.data.criteria.conditions[1].value, ["A", "B"])

    def test_empty_name_is_reported_by_path(self):
        result = validate_filter({"name": "", "category": "x", "criteria": {"conditions": [], "logic": "and"}})
        self.assertFalse(result.success)
        self.assertIsNone(result.data)
        self.assertEqual([(item.path, item.message) for item in result.errors], [("name", "Name is required")])

    def test_all_violations_are_reported_in_one_pass(self):
        result = validate_filter(
            {
                "name": "",
                "category": "",
                "criteria": {
                    "conditions": [
                        {"field": "title", "operator": "contains", "value": "chief"},
                        {"field": "tier", "operator": "between", "value": {"low": 1}},
                    ],
                    "logic": "xor",
                },
                "is_active": "yes",
            }
        )
        self.assertFalse(result.success)
        self.assertEqual(
            {item.path for item in result.errors},
            {
                "name",
                "category",
                "criteria.conditions.1.operator",
                "criteria.conditions.1.value",
                "criteria.logic",
                "is_active",
            },
        )

    def test_missing_sections_are_required(self):
        result = validate_filter({"name": "Leads"})
        self.assertFalse(result.success)
        self.assertEqual({item.path for item in result.errors}, {"category", "criteria"})

    def test_condition_shape_is_checked(self):
        result = validate_filter(
            _valid_payload(criteria={"conditions": [{"field": "", "operator": "equals"}, "title"]})
        )
        self.assertFalse(result.success)
        paths = {item.path for item in result.errors}
        self.assertIn("criteria.conditions.0.field", paths)
        self.assertIn("criteria.conditions.0.value", paths)
        self.assertIn("criteria.conditions.1", paths)

    def test_value_shapes(self):
        accepted = ["chief", 100, 2.5, True, ["a", "b"], [1, 2.5], []]
        for value in accepted:
            with self.subTest(value=value):
                payload = _valid_payload(criteria={"conditions": [{"field": "x", "operator": "equals", "value": value}]})
                result = validate_filter(payload)
                self.assertTrue(result.success)
                self.assertEqual(result.data.criteria.conditions[0].value, value)

        rejected = [None, {"a": 1}, ["a", 1], [True], [["a"]]]
        for value in rejected:
            with self.subTest(value=value):
                payload = _valid_payload(criteria={"conditions": [{"field": "x", "operator": "equals", "value": value}]})
                result = validate_filter(payload)
                self.assertFalse(result.success)
                self.assertEqual([item.path for item in result.errors], ["criteria.conditions.0.value"])

    def test_bool_value_keeps_its_type(self):
        payload = _valid_payload(criteria={"conditions": [{"field": "x", "operator": "equals", "value": True}]})
        value = validate_filter(payload).data.criteria.conditions[0].value
        self.assertIs(value, True)

    def test_types_are_not_coerced(self):
        result = validate_filter(_valid_payload(name=42, is_active="true"))
        self.assertFalse(result.success)
        self.assertEqual({item.path for item in result.errors}, {"name", "is_active"})

    def test_non_object_candidate(self):
        result = validate_filter(["not", "a", "filter"])
        self.assertFalse(result.success)
        self.assertEqual([item.path for item in result.errors], [""])

    def test_audit_fields_are_kept_as_text(self):
        result = validate_filter(_valid_payload(id=3, user_id="user-1", created_at="2026-10-19T08:00:00Z", updated_at="today"))
        self.assertTrue(result.success)
        self.assertEqual(result.data.created_at, "2026-10-19T08:00:00Z")
        self.assertEqual(result.data.updated_at, "today")

        result = validate_filter(_valid_payload(created_at=1700000000))
        self.assertEqual([item.path for item in result.errors], ["created_at"])

    def test_unknown_keys_are_ignored(self):
        result = validate_filter(_valid_payload(color="blue"))
        self.assertTrue(result.success)
        self.assertNotIn("color", result.data.model_dump())


class PrepareFilterForSaveTests(unittest.TestCase):
    def test_empty_input_is_rejected(self):
        with self.assertRaises(InvalidFilterError) as ctx:
            prepare_filter_for_save({})
        self.assertEqual({item.path for item in ctx.exception.errors}, {"name", "category"})
        message = str(ctx.exception)
        self.assertTrue(message.startswith("Invalid filter: "))
        self.assertEqual(json.loads(message[len("Invalid filter: "):])[0]["path"], "name")

    def test_none_is_treated_as_empty(self):
        with self.assertRaises(InvalidFilterError):
            prepare_filter_for_save(None)

    def test_missing_criteria_and_active_flag_get_defaults(self):
        draft = prepare_filter_for_save({"name": "Leads", "category": "opportunity_keywords"})
        self.assertEqual(draft.criteria.conditions, [])
        self.assertEqual(draft.criteria.logic, "and")
        self.assertTrue(draft.is_active)

    def test_identity_and_audit_fields_are_dropped(self):
        draft = prepare_filter_for_save(_valid_payload(id=7, user_id="someone", is_active=False))
        dumped = draft.model_dump()
        self.assertEqual(set(dumped), {"name", "category", "criteria", "is_active"})
        self.assertFalse(draft.is_active)

    def test_invalid_criteria_still_fails_after_defaults(self):
        with self.assertRaises(InvalidFilterError) as ctx:
            prepare_filter_for_save(_valid_payload(criteria={"conditions": [{"field": "x", "operator": "like", "value": "a"}]}))
        self.assertEqual([item.path for item in ctx.exception.errors], ["criteria.conditions.0.operator"])

    def test_non_mapping_input(self):
        with self.assertRaises(InvalidFilterError) as ctx:
            prepare_filter_for_save("Leads")
        self.assertEqual(ctx.exception.errors[0].path, "")


if __name__ == "__main__":
    unittest.main()
