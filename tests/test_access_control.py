import pytest

from prompt_portal.services.access_control import ensure_owner, is_owner, is_visible
from prompt_portal.services.errors import PermissionDenied

from tests.factories import make_prompt


def test_owner_sees_private_prompt():
    prompt = make_prompt("p1", "alice", is_public=False)
    assert is_visible(prompt, "alice", "org-1")


def test_colleague_sees_only_public_prompts():
    assert is_visible(make_prompt("p1", "alice", is_public=True), "bob", "org-1")
    assert not is_visible(make_prompt("p2", "alice", is_public=False), "bob", "org-1")


def test_public_prompt_is_invisible_to_other_organizations():
    prompt = make_prompt("p1", "alice", is_public=True)
    assert not is_visible(prompt, "carol", "org-2")


def test_owner_outside_organization_does_not_see_prompt():
    prompt = make_prompt("p1", "alice", organization_id="org-1")
    assert not is_visible(prompt, "alice", "org-2")


def test_ensure_owner():
    prompt = make_prompt("p1", "alice")
    assert is_owner(prompt, "alice")
    ensure_owner(prompt, "alice")
    with pytest.raises(PermissionDenied):
        ensure_owner(prompt, "bob")
