from django.db import migrations, models


def fill_key_features_text(apps, schema_editor):
    Product = apps.get_model('catalog_admin', 'Product')
    for product in Product.objects.all().only('id', 'key_features'):
        text = "\n".join(str(feature) for feature in (product.key_features or []))
        Product.objects.filter(pk=product.pk).update(key_features_text=text)


class Migration(migrations.Migration):

    dependencies = [
        ('catalog_admin', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='product',
            name='key_features_text',
            field=models.TextField(blank=True, default='', editable=False),
        ),
        migrations.RunPython(fill_key_features_text, migrations.RunPython.noop),
    ]
