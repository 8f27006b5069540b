"""成员关系镜像修复测试"""

from taskshare.core.reconcile import reconcile_memberships
from taskshare.core.store import StoreGroup

from ..factories import make_group


class TestReconcileMemberships:
    async def test_repairs_stale_and_extra_entries(self, store_group: StoreGroup, seed_users):
        await seed_users("alice", "bob", "carol")
        await store_group.group_store.save_group(
            make_group("G1", creator_id="alice", members=["alice", "bob"])
        )
        await store_group.group_store.save_group(make_group("G2", creator_id="bob"))

        # alice 镜像一致；bob 缺 G2 且保留了已退出的 G9；carol 多出 G1
        await store_group.user_store.update_groups("alice", ["G1"])
        await store_group.user_store.update_groups("bob", ["G9", "G1"])
        await store_group.user_store.update_groups("carol", ["G1"])

        report = await reconcile_memberships(store_group.group_store, store_group.user_store)

        assert report.users_scanned == 3
        assert report.users_repaired == 2
        assert (await store_group.user_store.get_user("alice")).groups == ["G1"]
        assert (await store_group.user_store.get_user("bob")).groups == ["G1", "G2"]
        assert (await store_group.user_store.get_user("carol")).groups == []

    async def test_consistent_store_untouched(self, store_group: StoreGroup, seed_users):
        await seed_users("alice")
        await store_group.group_store.save_group(make_group("G1", creator_id="alice"))
        await store_group.user_store.update_groups("alice", ["G1"])

        report = await reconcile_memberships(store_group.group_store, store_group.user_store)
        assert report.users_repaired == 0


class TestReconcileCommand:
    async def test_cli_repairs_database(
        self, store_group: StoreGroup, seed_users, tmp_db_path, monkeypatch, capsys
    ):
        """reconcile-memberships 命令读取 TASKSHARE_DB_PATH 指向的数据库"""
        from taskshare.core.__main__ import reconcile

        await seed_users("alice")
        await store_group.group_store.save_group(make_group("G1", creator_id="alice"))
        monkeypatch.setenv("TASKSHARE_DB_PATH", str(tmp_db_path))

        await reconcile()

        assert "修复 1 个镜像" in capsys.readouterr().out
        assert (await store_group.user_store.get_user("alice")).groups == ["G1"]
