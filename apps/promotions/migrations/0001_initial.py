import decimal

import apps.promotions.models
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Industry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
            ],
            options={
                'verbose_name_plural': 'industries',
                'db_table': 'industries',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Promotion',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField()),
                ('start_date', models.DateField()),
                ('end_date', models.DateField()),
                ('banner_url', models.CharField(max_length=500)),
                ('is_approved', models.BooleanField(db_index=True, default=False)),
                ('quantity', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('used_quantity', models.PositiveIntegerField(default=0)),
                ('pending', models.PositiveIntegerField(default=0)),
                ('unique_code', models.CharField(default=apps.promotions.models.generate_unique_code, max_length=64, unique=True)),
                ('original_price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.01'))])),
                ('promotional_price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.01'))])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('industry', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='promotions', to='promotions.industry')),
                ('seller', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='promotions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'promotions',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['is_approved', 'created_at'], name='promotions_approved_idx'),
                    models.Index(fields=['seller', 'created_at'], name='promotions_seller_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(check=models.Q(('quantity__gte', 1)), name='promotion_quantity_positive'),
                    models.CheckConstraint(check=models.Q(('used_quantity__lte', models.F('quantity'))), name='promotion_used_lte_quantity'),
                    models.CheckConstraint(check=models.Q(('used_quantity__lte', models.F('quantity') - models.F('pending'))), name='promotion_used_plus_pending_lte_quantity'),
                    models.CheckConstraint(check=models.Q(('start_date__lte', models.F('end_date'))), name='promotion_start_before_end'),
                    models.CheckConstraint(check=models.Q(('promotional_price__gt', 0)), name='promotion_price_positive'),
                ],
            },
        ),
    ]
