# src/dtoshield/recipes/classic.py

PROMPT_TEMPLATE = """File: {file_name}
<content>{file_content}</content>

Analyze this TypeScript DTO and add security-focused validation.

1. Use @IsUUID(4) for userToken, sessionToken, accessToken, refreshToken, apiKey and every field ending in Id.
2. Avoid redundant validators: @IsEmail(), @IsUUID(), @IsUrl() and @IsMongoId() already reject empty values,
   so only add @IsNotEmpty() to plain strings. Use @IsOptional() for optional fields.
3. Avoid Transform, except for email normalisation.
4. Infer validation from field names:
   - names: @IsString(), @Length(2, 50), letters/spaces/hyphens/apostrophes only
   - username: @Matches(/^[a-zA-Z0-9_-]+$/), @Length(3, 30)
   - email: @IsEmail(), @MaxLength(255)
   - password: @IsString(), @MinLength(8), @MaxLength(100)
   - phone: @IsPhoneNumber(null)
   - url: @IsUrl({{ protocols: ['https'], require_protocol: true }})
   - price, amount: @IsNumber({{ maxDecimalPlaces: 2 }}), @Min(0)
   - dates: @IsISO8601({{ strict: true }})
   - arrays: @IsArray(), @ArrayMaxSize(50)
5. Give every @ApiProperty a description and example explaining its security constraints, e.g.
   @ApiProperty({{
     description: 'Unique user identifier - UUID v4 format required for security',
     example: '123e4567-e89b-12d3-a456-426614174000',
     pattern: '^[0-9a-f]{{8}}-[0-9a-f]{{4}}-4[0-9a-f]{{3}}-[89ab][0-9a-f]{{3}}-[0-9a-f]{{12}}$'
   }})
   @IsUUID(4) // Security: Prevents injection attacks
   userId: string;
6. Add a short "// Security:" comment after each validator, e.g.
   @MinLength(8) // Security: Minimum password strength
   @Matches(/^[a-zA-Z0-9_-]+$/) // Security: Only letters, numbers, underscores and hyphens
   @ArrayMaxSize(100) // Security: Prevent memory exhaustion
7. Add the needed imports and keep the original property types and file structure.

Return ONLY the raw TypeScript code of the complete file: no Markdown code blocks, no explanation."""


def build_classic_prompt(file_name: str, file_content: str) -> str:
    return PROMPT_TEMPLATE.format(file_name=file_name, file_content=file_content)
