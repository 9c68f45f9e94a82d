import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Reservation',
            fields=[
                ('reservation_id', models.BigAutoField(primary_key=True, serialize=False)),
                ('first_name', models.CharField(blank=True, max_length=100)),
                ('last_name', models.CharField(blank=True, max_length=100)),
                ('mobile_number', models.CharField(blank=True, max_length=20)),
                ('reservation_date', models.DateField(blank=True, null=True)),
                ('reservation_time', models.TimeField(blank=True, null=True)),
                ('people', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('status', models.CharField(choices=[('booked', 'Booked'), ('seated', 'Seated'), ('finished', 'Finished')], default='booked', max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['reservation_date', 'reservation_time'],
            },
        ),
        migrations.CreateModel(
            name='Table',
            fields=[
                ('table_id', models.BigAutoField(primary_key=True, serialize=False)),
                ('table_name', models.CharField(max_length=50, validators=[django.core.validators.MinLengthValidator(2)])),
                ('capacity', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('status', models.CharField(choices=[('free', 'Free'), ('occupied', 'Occupied')], default='free', editable=False, max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('reservation', models.OneToOneField(blank=True, db_column='reservation_id', null=True, on_delete=django.db.models.deletion.PROTECT, related_name='table', to='seating.reservation')),
            ],
            options={
                'ordering': ['table_name'],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(('reservation__isnull', False), ('status', 'occupied')),
                            models.Q(('reservation__isnull', True), ('status', 'free')),
                            _connector='OR',
                        ),
                        name='table_status_matches_reservation',
                    ),
                ],
            },
        ),
    ]
