import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='NavbarCategory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
                ('slug', models.SlugField(blank=True, max_length=120, unique=True)),
                ('description', models.TextField(blank=True, default='')),
                ('order', models.IntegerField(db_index=True, default=0)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name_plural': 'navbar categories',
                'ordering': ['order', 'created_at'],
            },
        ),
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(db_index=True, max_length=150)),
                ('slug', models.SlugField(blank=True, max_length=170, unique=True)),
                ('description', models.TextField(blank=True, default='')),
                ('image', models.CharField(blank=True, default='', max_length=500)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('navbar_category', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='categories', to='catalog_admin.navbarcategory')),
            ],
            options={
                'verbose_name_plural': 'categories',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='SubCategory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(db_index=True, max_length=150)),
                ('slug', models.SlugField(blank=True, max_length=170, unique=True)),
                ('description', models.TextField(blank=True, default='')),
                ('image', models.CharField(blank=True, default='', max_length=500)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='subcategories', to='catalog_admin.category')),
            ],
            options={
                'verbose_name_plural': 'subcategories',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(db_index=True, max_length=200)),
                ('slug', models.SlugField(blank=True, max_length=220, unique=True)),
                ('description', models.TextField()),
                ('key_features', models.JSONField(blank=True, default=list)),
                ('image1', models.CharField(max_length=500)),
                ('image2', models.CharField(blank=True, default='', max_length=500)),
                ('image3', models.CharField(blank=True, default='', max_length=500)),
                ('image4', models.CharField(blank=True, default='', max_length=500)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='products', to='catalog_admin.category')),
                ('navbar_category', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='products', to='catalog_admin.navbarcategory')),
                ('subcategory', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='products', to='catalog_admin.subcategory')),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Contact',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('full_name', models.CharField(max_length=100)),
                ('email', models.EmailField(db_index=True, max_length=254)),
                ('phone', models.CharField(max_length=20)),
                ('company', models.CharField(blank=True, default='', max_length=200)),
                ('service', models.CharField(choices=[('Network Infrastructure', 'Network Infrastructure'), ('Wireless Solutions', 'Wireless Solutions'), ('Security Systems', 'Security Systems'), ('Cloud Services', 'Cloud Services'), ('Technical Support', 'Technical Support'), ('Partnership', 'Partnership'), ('Other', 'Other')], db_index=True, max_length=50)),
                ('subject', models.CharField(max_length=200)),
                ('message', models.TextField(max_length=2000)),
                ('status', models.CharField(choices=[('new', 'New'), ('replied', 'Replied'), ('in_progress', 'In Progress'), ('closed', 'Closed')], db_index=True, default='new', max_length=20)),
                ('priority', models.CharField(choices=[('low', 'Low'), ('medium', 'Medium'), ('high', 'High')], db_index=True, default='medium', max_length=10)),
                ('source', models.CharField(default='Website Form', max_length=100)),
                ('is_read', models.BooleanField(db_index=True, default=False)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='DashboardSnapshot',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('total_contacts', models.PositiveIntegerField(default=0)),
                ('total_products', models.PositiveIntegerField(default=0)),
                ('total_navbar_categories', models.PositiveIntegerField(default=0)),
                ('total_categories', models.PositiveIntegerField(default=0)),
                ('total_subcategories', models.PositiveIntegerField(default=0)),
                ('new_contacts', models.PositiveIntegerField(default=0)),
                ('replied_contacts', models.PositiveIntegerField(default=0)),
                ('in_progress_contacts', models.PositiveIntegerField(default=0)),
                ('closed_contacts', models.PositiveIntegerField(default=0)),
                ('unread_contacts', models.PositiveIntegerField(default=0)),
                ('high_priority_contacts', models.PositiveIntegerField(default=0)),
                ('contacts_growth', models.FloatField(default=0)),
                ('products_growth', models.FloatField(default=0)),
                ('categories_growth', models.FloatField(default=0)),
                ('service_distribution', models.JSONField(blank=True, default=list)),
                ('contacts_trend', models.JSONField(blank=True, default=list)),
                ('products_trend', models.JSONField(blank=True, default=list)),
                ('products_by_category', models.JSONField(blank=True, default=list)),
                ('categories_breakdown', models.JSONField(blank=True, default=list)),
                ('avg_response_time', models.PositiveIntegerField(default=0)),
                ('completion_rate', models.PositiveIntegerField(default=0)),
                ('generated_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('period_start', models.DateTimeField()),
                ('period_end', models.DateTimeField()),
                ('snapshot_type', models.CharField(choices=[('daily', 'Daily'), ('weekly', 'Weekly'), ('monthly', 'Monthly'), ('real-time', 'Real-time'), ('manual', 'Manual')], db_index=True, default='real-time', max_length=20)),
                ('created_by', models.CharField(default='system', max_length=150)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['-generated_at'],
            },
        ),
    ]
