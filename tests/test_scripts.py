from create_admin import create_admin, main
from generate_key import generate_secret_key
from init_db import init_db
from models import RoleEnum


def test_generate_secret_key_is_random_hex():
    first, second = generate_secret_key(), generate_secret_key()

    assert len(first) == 64
    int(first, 16)
    assert first != second


def test_init_db_lists_tables(capsys):
    init_db()

    out = capsys.readouterr().out
    for table in ("users", "posts", "ratings", "comments", "notifications", "follows"):
        assert table in out


def test_create_admin_is_idempotent(capsys):
    admin = create_admin("root", "root@example.com", "rootpass")
    again = create_admin("root", "root@example.com", "rootpass")

    assert admin.role == RoleEnum.admin
    assert again.id == admin.id
    assert "already exists" in capsys.readouterr().out


def test_create_admin_cli(capsys):
    main(["--username", "ops", "--email", "ops@example.com", "--password", "opspass"])

    assert "Admin created successfully: ops / ops@example.com" in capsys.readouterr().out
