import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Medicine',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, unique=True)),
                ('classification', models.CharField(blank=True, default='', help_text='Raw classification label from the drug catalogue', max_length=255)),
                ('image_url', models.URLField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Medicine',
                'verbose_name_plural': 'Medicines',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Prescription',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', models.PositiveSmallIntegerField(default=1, help_text='Dosage taken per intake')),
                ('times', models.PositiveSmallIntegerField(default=1, help_text='Intakes per day')),
                ('day', models.PositiveIntegerField(help_text='Duration in days', validators=[django.core.validators.MinValueValidator(1)])),
                ('start_date', models.DateField(default=django.utils.timezone.localdate)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('medicine', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='prescriptions', to='medication.medicine')),
                ('member', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='prescriptions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Prescription',
                'verbose_name_plural': 'Prescriptions',
                'ordering': ['start_date', 'id'],
            },
        ),
        migrations.CreateModel(
            name='Alarm',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('time', models.TimeField(help_text='Time of day the reminder fires')),
                ('is_available', models.BooleanField(default=True, help_text='Reminder switched on')),
                ('is_eaten', models.BooleanField(default=False, help_text='Dose taken today')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('prescription', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='alarms', to='medication.prescription')),
            ],
            options={
                'verbose_name': 'Alarm',
                'verbose_name_plural': 'Alarms',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='DoseRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField()),
                ('is_eaten', models.BooleanField(default=False)),
                ('recorded_at', models.DateTimeField(auto_now=True)),
                ('alarm', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='dose_records', to='medication.alarm')),
                ('medicine', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='dose_records', to='medication.medicine')),
                ('member', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='dose_records', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Dose Record',
                'verbose_name_plural': 'Dose Records',
                'ordering': ['-date', 'id'],
            },
        ),
        migrations.AddConstraint(
            model_name='prescription',
            constraint=models.UniqueConstraint(fields=('member', 'medicine'), name='unique_member_medicine'),
        ),
        migrations.AddConstraint(
            model_name='doserecord',
            constraint=models.UniqueConstraint(fields=('alarm', 'date'), name='unique_alarm_date'),
        ),
        migrations.AddIndex(
            model_name='doserecord',
            index=models.Index(fields=['member', 'date'], name='idx_dose_member_date'),
        ),
    ]
