from app import create_app
from extensions import db
from models import ROLES, User
from security import hash_password

app = create_app()

def create_user(username, password, role, email=None, full_name=None):
    with app.app_context():
        # username must stay unique
        existing_user = User.query.filter_by(username=username).first()
        if existing_user:
            print(f"User '{username}' already exists with role '{existing_user.role}'.")
            return None

        user = User(
            username=username,
            password=hash_password(password),
            role=role,
            email=email,
            full_name=full_name,
        )
        db.session.add(user)
        db.session.commit()
        print(f"Created user: {username} (role: {role})")
        return user

if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description='Create a back-office user.')
    parser.add_argument('username', help='Username')
    parser.add_argument('password', help='Password (at least 8 characters)')
    parser.add_argument('role', choices=list(ROLES), help='User role')
    parser.add_argument('--email', help='Email address')
    parser.add_argument('--full-name', help='Display name')

    args = parser.parse_args()
    if len(args.password) < 8:
        parser.error('password must be at least 8 characters')
    create_user(args.username, args.password, args.role, args.email, args.full_name)
