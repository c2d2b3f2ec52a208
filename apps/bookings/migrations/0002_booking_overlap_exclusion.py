"""Database-level guard against double-booking on PostgreSQL.

Installs GiST exclusion constraints so two non-cancelled bookings for the
same therapist, or the same room, can never overlap on [start, end). Other
backends rely on the row locks taken by the booking service.
"""

from django.db import migrations

EXCLUSIONS = {
    "booking_therapist_no_overlap": "therapist_id",
    "booking_room_no_overlap": "room_id",
}


def add_exclusion_constraints(apps, schema_editor):
    if schema_editor.connection.vendor != "postgresql":
        return
    table = apps.get_model("bookings", "Booking")._meta.db_table
    schema_editor.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")
    for name, column in EXCLUSIONS.items():
        schema_editor.execute(
            f"ALTER TABLE {table} ADD CONSTRAINT {name} EXCLUDE USING gist "
            f"({column} WITH =, tstzrange(start_time, end_time, '[)') WITH &&) "
            f"WHERE (status <> 'CANCELLED' AND {column} IS NOT NULL)"
        )


def remove_exclusion_constraints(apps, schema_editor):
    if schema_editor.connection.vendor != "postgresql":
        return
    table = apps.get_model("bookings", "Booking")._meta.db_table
    for name in EXCLUSIONS:
        schema_editor.execute(f"ALTER TABLE {table} DROP CONSTRAINT IF EXISTS {name}")


class Migration(migrations.Migration):

    dependencies = [
        ("bookings", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(add_exclusion_constraints, remove_exclusion_constraints),
    ]
