import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

	initial = True

	dependencies = []

	operations = [
		migrations.CreateModel(
			name="StaffPoints",
			fields=[
				("user_id", models.CharField(max_length=64, primary_key=True, serialize=False)),
				("points", models.BigIntegerField(default=0)),
				("updated_at", models.DateTimeField(auto_now=True)),
			],
			options={
				"db_table": "staff_points",
				"verbose_name_plural": "staff points",
			},
		),
		migrations.CreateModel(
			name="PointsHistory",
			fields=[
				("id", models.BigAutoField(primary_key=True, serialize=False)),
				("target_user_id", models.CharField(max_length=64)),
				("action_by_user_id", models.CharField(max_length=64)),
				("action_type", models.CharField(choices=[("ADD", "Add"), ("REMOVE", "Remove")], max_length=6)),
				("amount", models.BigIntegerField()),
				("before_points", models.BigIntegerField()),
				("after_points", models.BigIntegerField()),
				("reason", models.TextField(blank=True, null=True)),
				("created_at", models.DateTimeField(default=django.utils.timezone.now)),
			],
			options={
				"db_table": "points_history",
				"verbose_name_plural": "points history",
				"indexes": [
					models.Index(fields=["target_user_id", "-created_at"], name="points_hist_target_created"),
				],
				"constraints": [
					models.CheckConstraint(condition=models.Q(("amount__gt", 0)), name="points_hist_amount_positive"),
					models.CheckConstraint(
						condition=models.Q(
							models.Q(("action_type", "ADD"), ("after_points", models.F("before_points") + models.F("amount"))),
							models.Q(("action_type", "REMOVE"), ("after_points", models.F("before_points") - models.F("amount"))),
							_connector="OR",
						),
						name="points_hist_conservation",
					),
				],
			},
		),
	]
