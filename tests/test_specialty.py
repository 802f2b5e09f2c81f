from assignment.specialty import find_specialty_matches, is_specialty_match, required_specialties
from models import RosterMember, TaskDescriptor


def test_substring_match_on_type(three_roster):
    task = TaskDescriptor(type="nsf_followup")

    assert find_specialty_matches(task, three_roster) == ["Ana"]


def test_nsf_specialist_matches_regardless_of_other_specialties():
    member = RosterMember(name="M", specialties={"nsf", "commercial", "retention"}, capacity=5)

    assert is_specialty_match(TaskDescriptor(type="nsf_followup"), member)


def test_premium_rule_matches_high_value_members(three_roster):
    task = TaskDescriptor(type="general", premium=5000)

    assert find_specialty_matches(task, three_roster) == ["Cleo"]


def test_premium_just_below_threshold_does_not_match(three_roster):
    assert find_specialty_matches(TaskDescriptor(type="general", premium=4999.99), three_roster) == []


def test_payment_maps_to_payment_issues(three_roster):
    assert find_specialty_matches(TaskDescriptor(type="payment_reminder"), three_roster) == ["Ana"]


def test_members_matching_several_rules_appear_once(three_roster):
    task = TaskDescriptor(type="commercial_renewal", premium=8000)

    assert find_specialty_matches(task, three_roster) == ["Cleo"]


def test_multiple_members_in_roster_order(three_roster):
    task = TaskDescriptor(type="nsf_cancellation")

    assert find_specialty_matches(task, three_roster) == ["Ana", "Ben"]


def test_missing_type_only_matches_on_premium(three_roster):
    assert find_specialty_matches(TaskDescriptor(), three_roster) == []
    assert required_specialties(TaskDescriptor(premium=9000)) == ["high-value"]


def test_specialty_tags_are_not_matched_generically():
    member = RosterMember(name="M", specialties={"claims"}, capacity=5)

    assert not is_specialty_match(TaskDescriptor(type="claims"), member)
