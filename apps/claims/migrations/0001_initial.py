import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('promotions', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ClaimedPromotion',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('scanned', models.BooleanField(default=False)),
                ('claimed_at', models.DateTimeField(auto_now_add=True)),
                ('scanned_at', models.DateTimeField(blank=True, null=True)),
                ('promotion', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='claims', to='promotions.promotion')),
                ('scanned_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='scanned_claims', to=settings.AUTH_USER_MODEL)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='claimed_promotions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'claimed_promotions',
                'ordering': ['-claimed_at'],
                'indexes': [models.Index(fields=['user', 'scanned'], name='claims_user_scanned_idx')],
                'constraints': [models.UniqueConstraint(fields=('user', 'promotion'), name='unique_claim_per_user_promotion')],
            },
        ),
    ]
