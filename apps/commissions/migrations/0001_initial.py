import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


COMPLEXITY_CHOICES = [
    ('Low', 'Low'),
    ('Mid', 'Mid'),
    ('High', 'High'),
    ('Ultra High', 'Ultra High'),
    ('Sistine Chapel', 'Sistine Chapel'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('catalog', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Tag',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(db_index=True, max_length=50, unique=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'tags',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='CommissionRequest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('description', models.TextField()),
                ('character_count', models.PositiveSmallIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ('alternative_count', models.PositiveSmallIntegerField(default=0)),
                ('pose_count', models.PositiveSmallIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ('is_nsfw', models.BooleanField(default=False)),
                ('references', models.JSONField(blank=True, default=list)),
                ('total_price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('complexity', models.CharField(choices=COMPLEXITY_CHOICES, default='Low', max_length=20)),
                ('status', models.CharField(choices=[('Requested', 'Requested'), ('Declined', 'Declined'), ('Accepted', 'Accepted'), ('Working', 'Working'), ('Waiting', 'Waiting'), ('Finished', 'Finished')], default='Requested', max_length=20)),
                ('requested_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('service', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='requests', to='catalog.service')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='commission_requests', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'requests',
                'ordering': ['-requested_at'],
                'indexes': [
                    models.Index(fields=['status', 'requested_at'], name='requests_status_idx'),
                    models.Index(fields=['user', 'requested_at'], name='requests_user_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Commission',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(choices=[('Accepted', 'Accepted'), ('Working', 'Working'), ('Waiting', 'Waiting'), ('Finished', 'Finished')], default='Accepted', max_length=20)),
                ('progress', models.CharField(blank=True, max_length=100)),
                ('expected_completion_date', models.DateField(blank=True, null=True)),
                ('actual_completion_date', models.DateField(blank=True, null=True)),
                ('complexity', models.CharField(choices=COMPLEXITY_CHOICES, default='Low', max_length=20)),
                ('is_public_work', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('request', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='commission', to='commissions.commissionrequest')),
                ('tags', models.ManyToManyField(blank=True, related_name='commissions', to='commissions.tag')),
            ],
            options={
                'db_table': 'commissions',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'updated_at'], name='commissions_status_idx'),
                    models.Index(fields=['created_at'], name='commissions_created_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='CommissionUpdate',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(blank=True, max_length=200)),
                ('description', models.TextField(blank=True)),
                ('image_path', models.CharField(blank=True, max_length=255)),
                ('video_path', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('commission', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='updates', to='commissions.commission')),
            ],
            options={
                'db_table': 'commission_updates',
                'ordering': ['-created_at', '-id'],
            },
        ),
    ]
