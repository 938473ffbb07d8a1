from pydantic import BaseModel, Field
from typing import List, Optional, Union
from datetime import date, datetime

class Imdb(BaseModel):
    rating: Optional[float] = Field(None, description="IMDb rating of the movie.")
    votes: Optional[int] = Field(None, description="Number of IMDb votes for the movie.")
    id: Optional[Union[int, str]] = Field(None, description="IMDb ID of the movie.")

class TomatoesViewer(BaseModel):
    rating: Optional[float] = Field(None, description="Viewer rating of the movie on Rotten Tomatoes.")
    numReviews: Optional[int] = Field(None, description="Number of reviews from viewers on Rotten Tomatoes.")

class Tomatoes(BaseModel):
    viewer: Optional[TomatoesViewer] = None
    lastUpdated: Optional[datetime] = Field(None, description="When the Rotten Tomatoes data was last updated.")

class MovieSchema(BaseModel):
    """Shape of a document in the movies collection. Only title is required."""
    title: str = Field(..., description="Title of the movie.")
    plot: Optional[str] = Field(None, description="Description or plot of the movie.")
    fullplot: Optional[str] = Field(None, description="Full description or plot of the movie.")
    genres: Optional[List[str]] = None
    cast: Optional[List[str]] = None
    directors: Optional[List[str]] = None
    countries: Optional[List[str]] = None
    languages: Optional[List[str]] = None
    runtime: Optional[int] = Field(None, description="Runtime of the movie in minutes.")
    poster: Optional[str] = Field(None, description="URL of the movie poster.")
    released: Optional[date] = None
    rated: Optional[str] = None
    awards: Optional[str] = None
    year: Optional[int] = None
    type: Optional[str] = Field(None, description="Type or category of the movie.")
    imdb: Optional[Imdb] = None
    tomatoes: Optional[Tomatoes] = None
    num_mflix_comments: Optional[int] = None
    lastupdated: Optional[datetime] = None

    class Config:
        extra = "allow"

class CommentSchema(BaseModel):
    """Shape of a document in the comments collection."""
    name: str = Field(..., description="The name of the commenter.")
    email: str = Field(..., description="The email address of the commenter.")
    text: str = Field(..., description="The text content of the comment.")
    date: datetime = Field(..., description="When the comment was posted.")
    movie_id: str = Field(..., description="The ID of the movie the comment belongs to.")

    class Config:
        extra = "allow"

class Movie(MovieSchema):
    id: str = Field(..., alias="_id")

class Comment(CommentSchema):
    id: str = Field(..., alias="_id")

# Response envelopes, used for the generated API description

class MovieResponse(BaseModel):
    status: int
    data: Movie
    message: Optional[str] = None

class MovieListResponse(BaseModel):
    status: int
    data: List[Movie]

class CommentResponse(BaseModel):
    status: int
    data: Comment
    message: Optional[str] = None

class CommentListResponse(BaseModel):
    status: int
    data: List[Comment]

class MessageResponse(BaseModel):
    status: int
    message: str

class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
