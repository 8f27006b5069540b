"""部分更新合并引擎单元测试

测试内容：
1. owner 可修改全部字段，collaborator 的委派字段被静默忽略
2. 空值/零值表示"不修改"
3. 不变量校验全有或全无
4. UNRELATED 角色直接拒绝
"""

from datetime import UTC, datetime

import pytest
from taskshare.core.access import CONTENT_FIELDS, DELEGATION_FIELDS, apply_task_update
from taskshare.core.exceptions import ForbiddenError, InvalidEntityError
from taskshare.core.models import TaskRole, TaskStatus, TaskUpdate

from ..factories import FIXED_NOW, make_task

LATER = datetime(2026, 2, 1, tzinfo=UTC)


class TestRolePolicy:
    def test_policy_sets_are_disjoint(self):
        assert CONTENT_FIELDS.isdisjoint(DELEGATION_FIELDS)

    def test_owner_updates_delegation_fields(self):
        task = make_task(owner_id="alice")
        updated, accepted = apply_task_update(
            task,
            TaskRole.OWNER,
            TaskUpdate(group_id="GRP001", assigned_to="bob", collaborators=["carol"]),
            now=LATER,
        )
        assert accepted == {"group_id", "assigned_to", "collaborators"}
        assert updated.group_id == "GRP001"
        assert updated.assigned_to == "bob"
        assert updated.collaborators == ["carol"]
        assert updated.updated_at == LATER

    def test_collaborator_delegation_fields_silently_ignored(self):
        """collaborator 提交 {title, assigned_to}：标题生效，执行人不变"""
        task = make_task(
            owner_id="alice",
            group_id="GRP001",
            assigned_to="dave",
            collaborators=["bob"],
        )
        updated, accepted = apply_task_update(
            task,
            TaskRole.COLLABORATOR,
            TaskUpdate(title="x", assigned_to="bob"),
        )
        assert accepted == {"title"}
        assert updated.title == "x"
        assert updated.assigned_to == "dave"

    def test_collaborator_cannot_change_collaborators(self):
        task = make_task(owner_id="alice", collaborators=["bob"])
        updated, accepted = apply_task_update(
            task,
            TaskRole.COLLABORATOR,
            TaskUpdate(collaborators=["bob", "mallory"], group_id=""),
        )
        assert accepted == frozenset()
        assert updated.collaborators == ["bob"]

    def test_collaborator_updates_content_fields(self):
        task = make_task(owner_id="alice", collaborators=["bob"])
        updated, accepted = apply_task_update(
            task,
            TaskRole.COLLABORATOR,
            TaskUpdate(
                title="新标题",
                description="新描述",
                status="in_progress",
                category="work",
                time_until_due_s=3600,
                remind_me=True,
            ),
        )
        assert accepted == CONTENT_FIELDS
        assert updated.status == TaskStatus.IN_PROGRESS
        assert updated.category == "work"
        assert updated.time_until_due_s == 3600
        assert updated.remind_me is True

    def test_unrelated_is_forbidden(self):
        task = make_task(owner_id="alice")
        with pytest.raises(ForbiddenError):
            apply_task_update(task, TaskRole.UNRELATED, TaskUpdate(title="x"))


class TestMergeSemantics:
    def test_empty_values_mean_no_change(self):
        task = make_task(owner_id="alice", category="home", time_until_due_s=60, remind_me=True)
        updated, accepted = apply_task_update(
            task,
            TaskRole.OWNER,
            TaskUpdate(title="", category="", time_until_due_s=0),
        )
        assert accepted == frozenset()
        assert updated.title == task.title
        assert updated.category == "home"
        assert updated.time_until_due_s == 60
        assert updated.remind_me is True

    def test_explicit_false_reminder_is_a_change(self):
        task = make_task(owner_id="alice", remind_me=True)
        updated, accepted = apply_task_update(task, TaskRole.OWNER, TaskUpdate(remind_me=False))
        assert accepted == {"remind_me"}
        assert updated.remind_me is False

    def test_owner_clears_group_with_empty_string(self):
        """group_id 为空字符串属于显式修改，清除委派"""
        task = make_task(owner_id="alice", group_id="GRP001", assigned_to="bob")
        updated, accepted = apply_task_update(task, TaskRole.OWNER, TaskUpdate(group_id=""))
        assert accepted == {"group_id"}
        assert updated.group_id == ""
        assert updated.assigned_to == "bob"

    def test_original_task_untouched(self):
        task = make_task(owner_id="alice")
        apply_task_update(task, TaskRole.OWNER, TaskUpdate(title="changed"), now=LATER)
        assert task.title == "写周报"
        assert task.updated_at == FIXED_NOW

    def test_collaborators_deduplicated_after_merge(self):
        task = make_task(owner_id="alice")
        updated, _ = apply_task_update(
            task, TaskRole.OWNER, TaskUpdate(collaborators=["bob", "bob", "carol"])
        )
        assert updated.collaborators == ["bob", "carol"]


class TestInvariantAllOrNothing:
    def test_group_without_assignee_rejects_whole_update(self):
        """一个字段导致不变量失败时，其他合法字段也不生效"""
        task = make_task(owner_id="alice")
        with pytest.raises(InvalidEntityError) as exc_info:
            apply_task_update(
                task,
                TaskRole.OWNER,
                TaskUpdate(title="valid title", group_id="GRP001"),
            )
        assert exc_info.value.code == "INVALID_ENTITY"
        assert exc_info.value.details
        assert task.title == "写周报"
        assert task.group_id is None

    def test_invalid_status_rejected(self):
        task = make_task(owner_id="alice", collaborators=["bob"])
        with pytest.raises(InvalidEntityError):
            apply_task_update(
                task,
                TaskRole.COLLABORATOR,
                TaskUpdate(title="ok", status="archived"),
            )

    def test_negative_duration_rejected(self):
        task = make_task(owner_id="alice")
        with pytest.raises(InvalidEntityError):
            apply_task_update(task, TaskRole.OWNER, TaskUpdate(time_until_due_s=-5))

    def test_ignored_field_cannot_break_invariant(self):
        """collaborator 提交的委派字段被忽略，因此不会触发不变量失败"""
        task = make_task(owner_id="alice", collaborators=["bob"])
        updated, accepted = apply_task_update(
            task,
            TaskRole.COLLABORATOR,
            TaskUpdate(title="x", group_id="GRP001"),
        )
        assert accepted == {"title"}
        assert updated.group_id is None
