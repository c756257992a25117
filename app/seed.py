from app import db
from app.models import AppSetting

DEFAULT_SETTINGS = {
    # key: [value, description, value_type]
    'WEEKEND_WEIGHT': ['0.6', 'Váha víkendového dne vůči všednímu dni (0 až 1, např. 0.6 pro 60 %)', 'float'],
    'DEFAULT_BRANCH': ['', 'Pobočka, která se vybere automaticky po nahrání reportu', 'string'],
}


def seed_data():
    """Populates the database with default settings."""
    for key, data in DEFAULT_SETTINGS.items():
        setting = AppSetting.query.filter_by(key=key).first()
        if not setting: # Only add if it doesn't exist
            setting = AppSetting(key=key, value=data[0], description=data[1], value_type=data[2])
            db.session.add(setting)
            print(f'Seeding setting: {key}')

    db.session.commit()
    print('Seeding complete.')
