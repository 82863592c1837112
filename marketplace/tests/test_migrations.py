from io import StringIO

import pytest
from django.core.management import call_command
from django.db import connection
from django.db.migrations.executor import MigrationExecutor

MARKETPLACE_TABLES = {
    "marketplace_category",
    "marketplace_subcategory",
    "marketplace_offertag",
    "marketplace_store",
    "marketplace_product",
    "marketplace_productvariant",
    "marketplace_variantimage",
    "marketplace_color",
    "marketplace_size",
    "marketplace_country",
    "marketplace_shippingrate",
    "marketplace_freeshipping",
    "marketplace_freeshipping_eligible_countries",
}


@pytest.mark.django_db
class TestMarketplaceMigrations:
    def test_models_have_no_pending_changes(self):
        # --check exits non-zero when the models drift from the migrations
        call_command("makemigrations", "marketplace", "--check", "--dry-run", stdout=StringIO())

    def test_initial_migration_is_applied(self):
        executor = MigrationExecutor(connection)

        assert ("marketplace", "0001_initial") in executor.loader.applied_migrations

    def test_marketplace_tables_exist(self):
        tables = set(connection.introspection.table_names())

        assert MARKETPLACE_TABLES <= tables

    def test_size_constraints_are_created(self):
        with connection.cursor() as cursor:
            constraints = connection.introspection.get_constraints(cursor, "marketplace_size")

        assert "size_price_positive" in constraints
        assert "size_discount_percentage" in constraints
