from app.database import SessionLocal, engine, Base
from app.models import AccessToken, Article, Comment, User
from app.schemas.articles import ArticleCreate
from app.schemas.auth import RegisterRequest
from app.schemas.comments import CommentCreate
from app.services import content, identity

# Create tables
Base.metadata.create_all(bind=engine)

db = SessionLocal()

# Clear existing data
db.query(Comment).delete()
db.query(Article).delete()
db.query(AccessToken).delete()
db.query(User).delete()
db.commit()

# Sample users
users = [
    RegisterRequest(
        fullname="John Doe",
        email="john.doe@example.com",
        datebirthday="1990-01-01",
        gender="male",
        linkphoto="http://example.com/photo.jpg",
        role="admin",
        password="password123",
        password_confirmation="password123",
    ),
    RegisterRequest(
        fullname="Jane Roe",
        email="jane.roe@example.com",
        datebirthday="1993-07-14",
        gender="female",
        role="user",
        password="password123",
        password_confirmation="password123",
    ),
]

tokens = {}
accounts = []
for data in users:
    user, token = identity.register(db, data)
    accounts.append(user)
    tokens[user.email] = token

john, jane = accounts

# Sample articles
articles = [
    (john, ArticleCreate(
        title="My First Article",
        category="Technology",
        content="This is the content of my first article.",
        link_picture="http://example.com/article_image.jpg",
        status="published",
    )),
    (john, ArticleCreate(
        title="Work in progress",
        category="General",
        content="Notes that are not ready yet.",
    )),
    (jane, ArticleCreate(
        title="Archived thoughts",
        category="Life",
        content="An older piece kept for reference.",
        status="archived",
    )),
]

created = [content.create_article(db, author, data) for author, data in articles]

# Sample comments
content.create_comment(db, jane, created[0].id, CommentCreate(content="Great introduction!"))
content.create_comment(db, john, created[2].id, CommentCreate(content="Thanks for sharing."))

db.close()

print(f"Seeded {len(accounts)} users, {len(created)} articles and 2 comments")
for email, token in tokens.items():
    print(f"  {email}: {token}")
