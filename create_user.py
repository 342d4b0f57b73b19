import argparse
import getpass

from fitcoach import create_app, db
from fitcoach.models import User

parser = argparse.ArgumentParser(description="Create an active account.")
parser.add_argument("email")
parser.add_argument("--name", default="Super Admin")
parser.add_argument("--role", default="admin", choices=["admin", "trainer", "nutritionist", "member"])
args = parser.parse_args()

app = create_app()

with app.app_context():
    email = args.email.strip().lower()

    # Existing accounts are left alone
    existing_user = User.query.filter_by(email=email).first()
    if existing_user:
        print(f"User with email '{email}' already exists.")
    else:
        password = getpass.getpass("Password: ")
        user = User(
            email=email,
            full_name=args.name,
            role=args.role,
            status="active",
        )
        user.set_password(password)
        db.session.add(user)
        db.session.commit()

        print(f"{args.role.capitalize()} created successfully!")
        print(f"Email: {email}")
